#!filepath: fmconvert/engines/schema_scan_engine.py
from __future__ import annotations

from typing import Iterable

import numpy as np

from fmconvert.core.types import ParsedRow, Schema, UINT32_MAX
from fmconvert.engines.base import BaseEngine
from fmconvert.utils.errors import ConsistencyFault


class SchemaScanEngine(BaseEngine[ParsedRow, None]):
    """
    Pass 1：维度发现（不保存任何行）

    累计：
      - num_rows / num_values
      - 最大 feature_id（→ num_features）
      - 单行最大 entry 数（→ row buffer 容量）
      - target 的全局 min / max（按 float32 比较）
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.num_rows = 0
        self.num_values = 0
        self.max_feature_id = -1
        self.max_row_size = 0
        self.min_target = np.float32(np.inf)
        self.max_target = np.float32(-np.inf)

    # --------------------------------------------------
    def process(self, row: ParsedRow) -> None:
        if self.num_rows == UINT32_MAX:
            raise ConsistencyFault(
                f"row count exceeds uint32 at line {row.lineno}"
            )

        target = np.float32(row.target)
        # nan 不参与 min/max
        if target < self.min_target:
            self.min_target = target
        if target > self.max_target:
            self.max_target = target

        self.num_rows += 1
        self.num_values += row.size
        if row.size > self.max_row_size:
            self.max_row_size = row.size

        for fid, _ in row.entries:
            if fid > self.max_feature_id:
                self.max_feature_id = fid

    def result(self) -> Schema:
        return Schema(
            num_rows=self.num_rows,
            num_values=self.num_values,
            num_features=self.max_feature_id + 1,
            min_target=float(self.min_target),
            max_target=float(self.max_target),
            max_row_size=self.max_row_size,
        )

    # --------------------------------------------------
    def scan(self, rows: Iterable[ParsedRow]) -> Schema:
        """
        消费整个行流一次，返回 Schema。
        """
        self.reset()
        for row in rows:
            self.process(row)
        return self.result()
