# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest
from loguru import logger

from fmconvert.utils.logger import logs


@pytest.fixture(autouse=True)
def disable_file_logger(monkeypatch):
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    # 阻止 logs 首次写日志时在 cwd 下创建文件 sink
    monkeypatch.setattr(logs, "_configured", True)
    yield


@pytest.fixture
def write_libfm(tmp_path: Path) -> Callable[..., Path]:
    """
    写一个 libFM 文本文件：
        path = write_libfm(["1 3:0.5", "# c"], name="train.libfm")
    """

    def _write(lines: Iterable[str], name: str = "input.libfm", newline: str = "\n") -> Path:
        p = tmp_path / name
        p.write_bytes(newline.join(lines).encode("utf-8") + newline.encode("utf-8"))
        return p

    return _write


@pytest.fixture
def out_paths(tmp_path: Path):
    out = tmp_path / "out"
    return out / "data.x", out / "data.y"


@pytest.fixture
def sample_lines() -> list[str]:
    return [
        "# libFM sample",
        "1.0 3:0.5 7:2.0",
        "",
        "  -2.5\t0:1 3:0.25 3:0.75   # duplicate id kept",
        "0.125",
        "4e1 12:-3.5e-2",
    ]
