#!filepath: fmconvert/observability/timeline_reporter.py
from typing import Dict

from fmconvert.utils.logger import logs


class TimelineReporter:
    """
    转换 Timeline 报告：
    - leaf timer → 耗时秒数
    """

    def __init__(self, timeline: Dict[str, float], label: str):
        self.timeline = timeline
        self.label = label

    def print(self):
        logs.info(f"[Timeline] ===== Conversion timeline for {self.label} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
