#!filepath: fmconvert/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fmconvert.core.types import Schema
from fmconvert.io.source import TextSource


@dataclass
class ConvertContext:
    """
    ConvertContext = 一次转换运行期的唯一上下文

    - Pipeline 负责构造
    - ScanStep 发布 schema，EncodeStep 只读
    - 不放业务逻辑
    """

    # -------------------------
    # resolved paths（ifile / ofilex / ofiley）
    # -------------------------
    input_path: Path
    matrix_path: Path
    vector_path: Path

    source: TextSource

    # -------------------------
    # step outputs
    # -------------------------
    schema: Optional[Schema] = None
    rows_written: int = 0
    values_written: int = 0
    # 本次运行真正打开（创建 / 截断）过的输出文件
    opened_outputs: list[Path] = field(default_factory=list)
