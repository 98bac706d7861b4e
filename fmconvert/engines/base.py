#!filepath: fmconvert/engines/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Iterable


InEvent = TypeVar("InEvent")
OutEvent = TypeVar("OutEvent")


class BaseEngine(ABC, Generic[InEvent, OutEvent]):
    """
    Engine 抽象基类（Atomic Engine Layer）：

    - 不做任何 I/O（不打开文件，不写二进制）
    - 专注“输入 → 输出”的纯逻辑
    - scan / encode 两遍共用同一套 engine 语义
    """

    @abstractmethod
    def process(self, event: InEvent) -> OutEvent:
        """
        处理单个输入（最小粒度单位）。
        """
        raise NotImplementedError

    def process_stream(self, events: Iterable[InEvent]) -> Iterable[OutEvent]:
        """
        流式处理，默认逐个调用 process。
        如需状态可在子类中覆写。
        """
        for ev in events:
            yield self.process(ev)
