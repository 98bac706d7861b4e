# fmconvert/pipeline/result.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fmconvert.core.types import Schema
from fmconvert.utils.errors import ConvertError


@dataclass(frozen=True)
class ConvertResult:
    """
    ConvertResult（不可变）

    ok=False 时 error 携带错误分类（io / parse / consistency），
    输出文件必须视为无效（outputs_discarded 表示是否已删除）。
    """

    ok: bool
    input_path: Path
    matrix_path: Path
    vector_path: Path

    schema: Optional[Schema] = None
    rows_written: int = 0
    values_written: int = 0

    error: Optional[ConvertError] = None
    outputs_discarded: bool = False

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        if self.ok:
            return (
                f"converted {self.rows_written} rows / {self.values_written} values "
                f"→ {self.matrix_path}, {self.vector_path}"
            )
        return str(self.error)
