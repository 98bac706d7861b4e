#!filepath: fmconvert/io/source.py
from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional, Tuple

from fmconvert.config.convert_config import ConvertConfig
from fmconvert.utils.errors import ConsistencyFault, ConvertIOError
from fmconvert.utils.filesystem import FileSystem
from fmconvert.utils.logger import logs


class TextSource(ABC):
    """
    可重复读取的文本输入（两遍读取必须看到同一份字节）

    - lines() 每调用一次 = 一次完整 pass
    - passes 记录已开始的 pass 数
    """

    name: str
    encoding: str

    def __init__(self, name: str, encoding: str = "utf-8"):
        self.name = name
        self.encoding = encoding
        self.passes = 0

    @abstractmethod
    def lines(self) -> Iterator[str]:
        ...

    def _decode_error(self, e: UnicodeDecodeError) -> ConvertIOError:
        return ConvertIOError(self.name, f"not valid {self.encoding} ({e.reason} at byte {e.start})")


class FileSource(TextSource):
    """
    按路径重读；首个 pass 记录 (size, mtime_ns) 指纹，
    之后每个 pass 开始前校验，变化 → ConsistencyFault
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8"):
        super().__init__(str(path), encoding)
        self.path = Path(path)
        self._fingerprint: Optional[Tuple[int, int]] = None

    def _stat(self) -> Tuple[int, int]:
        try:
            return FileSystem.fingerprint(self.path)
        except OSError as e:
            raise ConvertIOError(self.path, e.strerror or str(e)) from e

    def lines(self) -> Iterator[str]:
        current = self._stat()
        if self._fingerprint is None:
            self._fingerprint = current
        elif current != self._fingerprint:
            raise ConsistencyFault(f"{self.path} changed between passes")

        self.passes += 1
        try:
            fh = open(self.path, "r", encoding=self.encoding)
        except OSError as e:
            raise ConvertIOError(self.path, e.strerror or str(e)) from e

        with fh:
            try:
                for line in fh:
                    yield line
            except UnicodeDecodeError as e:
                raise self._decode_error(e) from e
            except OSError as e:
                raise ConvertIOError(self.path, e.strerror or str(e)) from e


class MemorySource(TextSource):
    """
    输入快照：字节一次性读入内存，两遍读取同一份不可变数据
    """

    def __init__(self, data: bytes, name: str = "<memory>", encoding: str = "utf-8"):
        super().__init__(name, encoding)
        self.data = bytes(data)

    @classmethod
    def from_path(cls, path: str | Path, encoding: str = "utf-8") -> "MemorySource":
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise ConvertIOError(path, e.strerror or str(e)) from e
        return cls(data, name=str(path), encoding=encoding)

    def lines(self) -> Iterator[str]:
        self.passes += 1
        try:
            text = self.data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise self._decode_error(e) from e
        yield from io.StringIO(text, newline=None)


def open_source(path: str | Path, cfg: ConvertConfig | None = None) -> TextSource:
    """
    根据 snapshot 策略构造输入：
      - memory → MemorySource
      - none   → FileSource
      - auto   → 文件 ≤ snapshot_max_mb 时 MemorySource，否则 FileSource
    """
    cfg = cfg or ConvertConfig()
    path = Path(path)

    if not path.is_file():
        raise ConvertIOError(path, "no such file")

    mode = cfg.snapshot
    if mode == "auto":
        size = FileSystem.get_file_size(path)
        mode = "memory" if size <= cfg.snapshot_max_mb * 1024 * 1024 else "none"
        logs.debug(
            f"[Source] {path.name} size={FileSystem.format_size(size)} → snapshot={mode}"
        )

    if mode == "memory":
        return MemorySource.from_path(path, encoding=cfg.encoding)
    return FileSource(path, encoding=cfg.encoding)
