#!filepath: fmconvert/core/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


# ----------------------------------------------------------------------
# 固定二进制布局（little endian / packed，与平台无关）
# ----------------------------------------------------------------------
MATRIX_FILE_ID = 2
VECTOR_FILE_VERSION = 1
FLOAT_SIZE = 4

UINT32_MAX = 0xFFFFFFFF
# feature_id 上限：num_features = max_id + 1 仍须落在 uint32 内
MAX_FEATURE_ID = UINT32_MAX - 1

MATRIX_HEADER_DTYPE = np.dtype(
    [
        ("magic_id", "<u4"),
        ("num_values", "<u8"),
        ("num_rows", "<u4"),
        ("num_cols", "<u4"),
        ("float_size", "<u4"),
    ]
)

VECTOR_HEADER_DTYPE = np.dtype(
    [
        ("file_version", "<u4"),
        ("element_size", "<u4"),
        ("num_rows", "<u4"),
    ]
)

SPARSE_ENTRY_DTYPE = np.dtype([("id", "<u4"), ("value", "<f4")])
ROW_SIZE_DTYPE = np.dtype("<u4")
TARGET_DTYPE = np.dtype("<f4")


# ----------------------------------------------------------------------
# 行 / Schema
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ParsedRow:
    """
    一行 libFM 文本解析后的结果。

    entries 保持输入顺序，重复 feature_id 不合并。
    """

    target: float
    entries: List[Tuple[int, float]] = field(default_factory=list)
    lineno: int = 0

    @property
    def size(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Schema:
    """
    Schema（pass 1 产物，只读）

    - num_features = max(feature_id) + 1；无任何 feature 时为 0
    - max_row_size = 单行最多 entry 数（同一 id 可重复出现，可能 > num_features）
    - 0 行时 min_target=+inf / max_target=-inf
    """

    num_rows: int
    num_values: int
    num_features: int
    min_target: float
    max_target: float
    max_row_size: int = 0

    @classmethod
    def empty(cls) -> "Schema":
        return cls(
            num_rows=0,
            num_values=0,
            num_features=0,
            min_target=float("inf"),
            max_target=float("-inf"),
        )

    def summary(self) -> str:
        return (
            f"num_rows={self.num_rows}\tnum_values={self.num_values}\t"
            f"num_features={self.num_features}\t"
            f"min_target={self.min_target:g}\tmax_target={self.max_target:g}"
        )


# ----------------------------------------------------------------------
# Headers
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class MatrixHeader:
    num_values: int
    num_rows: int
    num_cols: int
    magic_id: int = MATRIX_FILE_ID
    float_size: int = FLOAT_SIZE

    @classmethod
    def from_schema(cls, schema: Schema) -> "MatrixHeader":
        return cls(
            num_values=schema.num_values,
            num_rows=schema.num_rows,
            num_cols=schema.num_features,
        )

    def to_bytes(self) -> bytes:
        arr = np.array(
            [(self.magic_id, self.num_values, self.num_rows, self.num_cols, self.float_size)],
            dtype=MATRIX_HEADER_DTYPE,
        )
        return arr.tobytes()

    @classmethod
    def from_bytes(cls, buf: bytes) -> "MatrixHeader":
        rec = np.frombuffer(buf, dtype=MATRIX_HEADER_DTYPE, count=1)[0]
        return cls(
            magic_id=int(rec["magic_id"]),
            num_values=int(rec["num_values"]),
            num_rows=int(rec["num_rows"]),
            num_cols=int(rec["num_cols"]),
            float_size=int(rec["float_size"]),
        )


@dataclass(frozen=True)
class VectorHeader:
    num_rows: int
    file_version: int = VECTOR_FILE_VERSION
    element_size: int = FLOAT_SIZE

    @classmethod
    def from_schema(cls, schema: Schema) -> "VectorHeader":
        return cls(num_rows=schema.num_rows)

    def to_bytes(self) -> bytes:
        arr = np.array(
            [(self.file_version, self.element_size, self.num_rows)],
            dtype=VECTOR_HEADER_DTYPE,
        )
        return arr.tobytes()

    @classmethod
    def from_bytes(cls, buf: bytes) -> "VectorHeader":
        rec = np.frombuffer(buf, dtype=VECTOR_HEADER_DTYPE, count=1)[0]
        return cls(
            file_version=int(rec["file_version"]),
            element_size=int(rec["element_size"]),
            num_rows=int(rec["num_rows"]),
        )
