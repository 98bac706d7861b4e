#!filepath: fmconvert/io/readers.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import numpy as np

from fmconvert.core.types import (
    FLOAT_SIZE,
    MATRIX_FILE_ID,
    MATRIX_HEADER_DTYPE,
    MatrixHeader,
    ROW_SIZE_DTYPE,
    SPARSE_ENTRY_DTYPE,
    TARGET_DTYPE,
    VECTOR_FILE_VERSION,
    VECTOR_HEADER_DTYPE,
    VectorHeader,
)
from fmconvert.utils.errors import ConsistencyFault, ConvertIOError


@dataclass(frozen=True)
class SparseMatrix:
    """
    x 文件解码结果（CSR 形式）

    row i 的 entry 位于 ids/values[row_ptr[i]:row_ptr[i + 1]]
    """

    header: MatrixHeader
    row_ptr: np.ndarray
    ids: np.ndarray
    values: np.ndarray

    @property
    def num_rows(self) -> int:
        return self.header.num_rows

    def row_sizes(self) -> np.ndarray:
        return np.diff(self.row_ptr)

    def row(self, i: int) -> tuple[np.ndarray, np.ndarray]:
        lo, hi = self.row_ptr[i], self.row_ptr[i + 1]
        return self.ids[lo:hi], self.values[lo:hi]


@dataclass(frozen=True)
class DenseVector:
    header: VectorHeader
    values: np.ndarray


def _read_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ConvertIOError(path, e.strerror or str(e)) from e


def read_matrix(path: str | Path) -> SparseMatrix:
    """
    解码 x 文件；header 不合法或 body 截断 → ConsistencyFault
    """
    buf = _read_bytes(Path(path))
    hsize = MATRIX_HEADER_DTYPE.itemsize
    if len(buf) < hsize:
        raise ConsistencyFault(f"{path}: truncated matrix header")

    header = MatrixHeader.from_bytes(buf[:hsize])
    if header.magic_id != MATRIX_FILE_ID:
        raise ConsistencyFault(f"{path}: unexpected magic id {header.magic_id}")
    if header.float_size != FLOAT_SIZE:
        raise ConsistencyFault(f"{path}: unsupported float size {header.float_size}")

    row_ptr = np.zeros(header.num_rows + 1, dtype=np.uint64)
    ids = np.empty(header.num_values, dtype=np.uint32)
    values = np.empty(header.num_values, dtype=np.float32)

    offset = hsize
    filled = 0
    for i in range(header.num_rows):
        if offset + ROW_SIZE_DTYPE.itemsize > len(buf):
            raise ConsistencyFault(f"{path}: truncated at row {i}")
        size = int(np.frombuffer(buf, dtype=ROW_SIZE_DTYPE, count=1, offset=offset)[0])
        offset += ROW_SIZE_DTYPE.itemsize

        end = offset + size * SPARSE_ENTRY_DTYPE.itemsize
        if end > len(buf) or filled + size > header.num_values:
            raise ConsistencyFault(f"{path}: truncated at row {i}")
        if size:
            entries = np.frombuffer(buf, dtype=SPARSE_ENTRY_DTYPE, count=size, offset=offset)
            ids[filled:filled + size] = entries["id"]
            values[filled:filled + size] = entries["value"]
        filled += size
        offset = end
        row_ptr[i + 1] = filled

    if filled != header.num_values:
        raise ConsistencyFault(
            f"{path}: header num_values={header.num_values}, rows hold {filled}"
        )
    if offset != len(buf):
        raise ConsistencyFault(f"{path}: {len(buf) - offset} trailing bytes")

    return SparseMatrix(header=header, row_ptr=row_ptr, ids=ids, values=values)


def read_vector(path: str | Path) -> DenseVector:
    buf = _read_bytes(Path(path))
    hsize = VECTOR_HEADER_DTYPE.itemsize
    if len(buf) < hsize:
        raise ConsistencyFault(f"{path}: truncated vector header")

    header = VectorHeader.from_bytes(buf[:hsize])
    if header.file_version != VECTOR_FILE_VERSION:
        raise ConsistencyFault(f"{path}: unsupported file version {header.file_version}")
    if header.element_size != FLOAT_SIZE:
        raise ConsistencyFault(f"{path}: unsupported element size {header.element_size}")

    expected = hsize + header.num_rows * TARGET_DTYPE.itemsize
    if len(buf) != expected:
        raise ConsistencyFault(f"{path}: expected {expected} bytes, got {len(buf)}")

    values = np.frombuffer(buf, dtype=TARGET_DTYPE, count=header.num_rows, offset=hsize)
    return DenseVector(header=header, values=values.copy())


def render_rows(matrix: SparseMatrix, vector: DenseVector) -> Iterator[str]:
    """
    把解码结果重新渲染成 libFM 文本行（float32 最短表示）
    """
    if matrix.num_rows != vector.header.num_rows:
        raise ConsistencyFault(
            f"matrix has {matrix.num_rows} rows, vector has {vector.header.num_rows}"
        )

    for i in range(matrix.num_rows):
        ids, values = matrix.row(i)
        parts = [str(vector.values[i])]
        parts.extend(f"{fid}:{val!s}" for fid, val in zip(ids.tolist(), values))
        yield " ".join(parts)
