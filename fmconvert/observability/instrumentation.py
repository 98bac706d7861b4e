#!filepath: fmconvert/observability/instrumentation.py
from __future__ import annotations

from dataclasses import dataclass
from contextlib import contextmanager
from collections import OrderedDict
from typing import Dict

from fmconvert.observability.progress import ProgressReporter
from fmconvert.observability.timer import Timer
from fmconvert.observability.metrics import MetricRecorder
from fmconvert.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Instrumentation（Leaf-only accounting + Parent scope）。

    1. Timeline 只记录叶子节点（record=True）
    2. Step / 父级 timer 仅作为时间语义边界（record=False）
    3. Instrumentation 本身不在热路径打日志
    """

    enabled: bool = True
    progress_every: int = 0

    def __post_init__(self):
        self.progress = ProgressReporter(enabled=self.enabled, every=self.progress_every)
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        record=True 为叶子节点（写入 timeline），
        record=False 只定义 wall-time，不产生副作用。
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def generate_timeline_report(self, label: str):
        TimelineReporter(self.timeline, label).print()


# -------------------------------------------------------------
# No-op Instrumentation（禁用 observability）
# -------------------------------------------------------------
class NoOpInstrumentation:
    """Instrumentation disabled 时使用。"""

    def __init__(self):
        self.progress = ProgressReporter(enabled=False)
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, label: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
