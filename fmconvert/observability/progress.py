#!filepath: fmconvert/observability/progress.py
from fmconvert.utils.logger import logs


class ProgressReporter:
    """
    最轻量进度系统（只写日志，不依赖 Rich/TQDM）

    every > 0 时，tick(task, current, total) 每 every 行输出一次。
    """

    def __init__(self, enabled: bool = True, every: int = 0):
        self.enabled = enabled
        self.every = every

    def start(self, task: str, total: int, unit: str = ""):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} started total={total} {unit}")

    def update(self, task: str, current: int, total: int, unit: str = ""):
        if not self.enabled:
            return
        pct = 100.0 * current / total if total else 100.0
        logs.info(f"[Progress] {task}: {current}/{total} {unit} ({pct:.1f}%)")

    def tick(self, task: str, current: int, total: int, unit: str = ""):
        if self.every and current % self.every == 0:
            self.update(task, current, total, unit)

    def done(self, task: str):
        if not self.enabled:
            return
        logs.info(f"[Progress] {task} done")
