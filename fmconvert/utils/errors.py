# fmconvert/utils/errors.py
from __future__ import annotations

from pathlib import Path


class ConvertError(RuntimeError):
    """
    转换过程中所有可预期失败的基类。
    Should NOT print traceback（CLI 只打印 message）。
    """

    kind: str = "convert"


class ConvertIOError(ConvertError):
    """输入不可读 / 输出无法创建。"""

    kind = "io"

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"unable to open {self.path}: {reason}")


class ParseError(ConvertError):
    """
    某一行无法被解析。

    - line     : 原始行文本（不含换行符）
    - lineno   : 1-based 行号
    - position : 解析停止处的字符偏移（0-based）
    """

    kind = "parse"

    def __init__(self, line: str, position: int, lineno: int = 0, reason: str = ""):
        self.line = line
        self.position = position
        self.lineno = lineno
        self.reason = reason

        char = line[position] if position < len(line) else "<eol>"
        where = f"line {lineno} " if lineno else ""
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f'cannot parse {where}"{line}" at character {position} {char!r}{detail}'
        )


class ConsistencyFault(ConvertError):
    """
    第二遍与第一遍得到的维度不一致：
    输入在两遍之间被修改，或 scanner / encoder 语义分歧。
    """

    kind = "consistency"
