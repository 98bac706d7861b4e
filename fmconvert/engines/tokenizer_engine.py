#!filepath: fmconvert/engines/tokenizer_engine.py
from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from fmconvert.core.types import MAX_FEATURE_ID, ParsedRow
from fmconvert.engines.base import BaseEngine
from fmconvert.utils.errors import ParseError


# 十进制浮点（与 locale 无关），含 inf / nan
_FLOAT = r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)"

_TARGET_RE = re.compile(rf"\s*({_FLOAT})", re.ASCII | re.IGNORECASE)
# "<id>:<value>"，':' 前不允许空白，':' 后允许
_ENTRY_RE = re.compile(rf"\s*(\d+):\s*({_FLOAT})", re.ASCII | re.IGNORECASE)

_BLANK = " \t"
_COMMENT = "#"


class LineTokenizer(BaseEngine[str, Optional[ParsedRow]]):
    """
    libFM 行解析器（无跨行状态）：

        <target> [<id>:<value>]* [# comment]

    - 空行 / '#' 开头的行 → None（跳过）
    - target 缺失 / 末尾残留非注释内容 → ParseError
    - entry 按输入顺序返回，不合并重复 id
    """

    def process(self, line: str) -> Optional[ParsedRow]:
        return self.tokenize(line)

    def tokenize(self, line: str, lineno: int = 0) -> Optional[ParsedRow]:
        line = line.rstrip("\r\n")

        pos = 0
        end = len(line)
        while pos < end and line[pos] in _BLANK:
            pos += 1
        if pos == end or line[pos] == _COMMENT:
            return None

        m = _TARGET_RE.match(line, pos)
        if m is None:
            raise ParseError(line, pos, lineno, reason="missing numeric target")
        target = float(m.group(1))
        pos = m.end()

        entries, pos = self._parse_entries(line, pos, lineno)

        while pos < end and line[pos] in _BLANK:
            pos += 1
        if pos < end and line[pos] != _COMMENT:
            raise ParseError(line, pos, lineno, reason="unexpected trailing content")

        return ParsedRow(target=target, entries=entries, lineno=lineno)

    @staticmethod
    def _parse_entries(line: str, pos: int, lineno: int) -> Tuple[List[Tuple[int, float]], int]:
        entries: List[Tuple[int, float]] = []
        while True:
            m = _ENTRY_RE.match(line, pos)
            if m is None:
                return entries, pos

            fid = int(m.group(1))
            if fid > MAX_FEATURE_ID:
                raise ParseError(
                    line, m.start(1), lineno, reason=f"feature id {fid} out of range"
                )
            entries.append((fid, float(m.group(2))))
            pos = m.end()

    # --------------------------------------------------
    def process_stream(self, lines: Iterable[str]) -> Iterator[ParsedRow]:
        """
        逐行解析，跳过空行 / 注释行；行号从 1 开始。
        """
        for lineno, line in enumerate(lines, start=1):
            row = self.tokenize(line, lineno)
            if row is not None:
                yield row
