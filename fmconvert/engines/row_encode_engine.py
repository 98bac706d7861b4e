#!filepath: fmconvert/engines/row_encode_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np

from fmconvert.core.types import ParsedRow, Schema, SPARSE_ENTRY_DTYPE
from fmconvert.engines.base import BaseEngine
from fmconvert.utils.errors import ConsistencyFault


class RowBuffer:
    """
    固定容量的行缓冲（只分配一次）

    capacity = max(num_features, max_row_size)：同一 feature_id 可在一行内重复出现

    - reset() 只把逻辑 size 置 0，不重新分配
    - 超出容量 → ConsistencyFault（不截断、不扩容）
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.data = np.zeros(capacity, dtype=SPARSE_ENTRY_DTYPE)
        self.size = 0

    def reset(self) -> None:
        self.size = 0

    def append(self, feature_id: int, value: float) -> None:
        if self.size >= self.capacity:
            raise ConsistencyFault(
                f"row buffer overflow: capacity={self.capacity}"
            )
        self.data[self.size] = (feature_id, value)
        self.size += 1

    def extend(self, entries: list[Tuple[int, float]]) -> None:
        n = len(entries)
        if not n:
            return
        if self.size + n > self.capacity:
            raise ConsistencyFault(
                f"row buffer overflow: size={self.size + n} capacity={self.capacity}"
            )
        ids, values = zip(*entries)
        view = self.data[self.size:self.size + n]
        view["id"] = ids
        view["value"] = values
        self.size += n

    def view(self) -> np.ndarray:
        return self.data[:self.size]


@dataclass(frozen=True)
class EncodedRow:
    target: np.float32
    entries: np.ndarray  # RowBuffer 视图，下一行 encode 之前有效

    @property
    def size(self) -> int:
        return int(self.entries.shape[0])


class RowEncodeEngine(BaseEngine[ParsedRow, EncodedRow]):
    """
    Pass 2：把解析后的行写进复用的 RowBuffer（不做 I/O）

    约束：
      - 必须基于完成的 Schema 构造
      - 每一行的 feature_id 必须 < num_features
      - finish() 校验写出的行数 / 值数与 Schema 一致
    """

    def __init__(self, schema: Schema):
        self.schema = schema
        self.buffer = RowBuffer(max(schema.num_features, schema.max_row_size))
        self.rows_encoded = 0
        self.values_encoded = 0

    def process(self, row: ParsedRow) -> EncodedRow:
        if self.rows_encoded >= self.schema.num_rows:
            raise ConsistencyFault(
                f"line {row.lineno}: more rows than scanned ({self.schema.num_rows})"
            )

        self.buffer.reset()
        for fid, _ in row.entries:
            if fid >= self.schema.num_features:
                raise ConsistencyFault(
                    f"line {row.lineno}: feature id {fid} >= num_features {self.schema.num_features}"
                )
        self.buffer.extend(row.entries)

        self.rows_encoded += 1
        self.values_encoded += self.buffer.size
        return EncodedRow(target=np.float32(row.target), entries=self.buffer.view())

    def process_stream(self, rows: Iterable[ParsedRow]) -> Iterator[EncodedRow]:
        for row in rows:
            yield self.process(row)
        self.finish()

    def finish(self) -> None:
        if self.rows_encoded != self.schema.num_rows:
            raise ConsistencyFault(
                f"encoded {self.rows_encoded} rows, scanned {self.schema.num_rows}"
            )
        if self.values_encoded != self.schema.num_values:
            raise ConsistencyFault(
                f"encoded {self.values_encoded} values, scanned {self.schema.num_values}"
            )
