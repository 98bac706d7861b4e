#!filepath: fmconvert/io/writers.py

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Optional

import numpy as np

from fmconvert.core.types import (
    MatrixHeader,
    ROW_SIZE_DTYPE,
    Schema,
    TARGET_DTYPE,
    VectorHeader,
)
from fmconvert.utils.errors import ConvertIOError
from fmconvert.utils.filesystem import FileSystem


class BinaryFileWriter:
    """
    单文件 append-only 二进制 Writer

    - overwrite=True  → "wb"
    - overwrite=False → "xb"（目标已存在则失败）
    - 不 seek，写入顺序即文件顺序
    """

    def __init__(self, out_path: Path, overwrite: bool = True):
        self.out_path = Path(out_path)
        self.overwrite = overwrite
        self.fh: Optional[BinaryIO] = None
        self.bytes_written = 0
        # open() 成功后才置 True
        self.opened = False

    def open(self) -> None:
        mode = "wb" if self.overwrite else "xb"
        try:
            FileSystem.ensure_dir(self.out_path.parent)
            self.fh = open(self.out_path, mode)
        except OSError as e:
            raise ConvertIOError(self.out_path, e.strerror or str(e)) from e
        self.opened = True

    def write(self, data: bytes) -> None:
        try:
            self.fh.write(data)
        except OSError as e:
            raise ConvertIOError(self.out_path, e.strerror or str(e)) from e
        self.bytes_written += len(data)

    def close(self) -> None:
        if self.fh is not None:
            self.fh.close()
            self.fh = None


class MatrixWriter(BinaryFileWriter):
    """
    x：MatrixHeader + 每行 (row_size:u4, row_size × (id:u4, value:f4))
    """

    def write_header(self, header: MatrixHeader) -> None:
        self.write(header.to_bytes())

    def write_row(self, entries: np.ndarray) -> None:
        self.write(np.array(entries.shape[0], dtype=ROW_SIZE_DTYPE).tobytes())
        if entries.shape[0]:
            self.write(entries.tobytes())


class VectorWriter(BinaryFileWriter):
    """
    y：VectorHeader + num_rows × f4
    """

    def write_header(self, header: VectorHeader) -> None:
        self.write(header.to_bytes())

    def write_target(self, target: float) -> None:
        self.write(np.array(target, dtype=TARGET_DTYPE).tobytes())


class DatasetWriter:
    """
    同时持有 x / y 两个输出流：

        with DatasetWriter(x_path, y_path) as w:
            w.open(schema)       # 立即写两个 header
            w.write_row(target, entries)

    异常时同样关闭两个文件（残缺文件留在磁盘上，由调用方丢弃）。
    """

    def __init__(self, matrix_path: Path, vector_path: Path, overwrite: bool = True):
        self.matrix_writer = MatrixWriter(matrix_path, overwrite=overwrite)
        self.vector_writer = VectorWriter(vector_path, overwrite=overwrite)

    def open(self, schema: Schema) -> None:
        self.matrix_writer.open()
        self.matrix_writer.write_header(MatrixHeader.from_schema(schema))
        self.vector_writer.open()
        self.vector_writer.write_header(VectorHeader.from_schema(schema))

    def write_row(self, target: float, entries: np.ndarray) -> None:
        self.vector_writer.write_target(target)
        self.matrix_writer.write_row(entries)

    @property
    def opened_paths(self) -> list[Path]:
        return [w.out_path for w in (self.matrix_writer, self.vector_writer) if w.opened]

    def close(self) -> None:
        try:
            self.matrix_writer.close()
        finally:
            self.vector_writer.close()

    def __enter__(self) -> "DatasetWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
