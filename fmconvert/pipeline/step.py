from __future__ import annotations

from fmconvert.pipeline.context import ConvertContext
from fmconvert.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    Pipeline Step 基类

    职责：
      1. 作为 orchestration 层（调用 adapter，读写 ctx）
      2. 提供 Step 级时间语义边界（parent scope）

    规则：
      - Step 本身不进入 timeline
      - leaf timer 由 adapter 内部记录
      - Step 行为不依赖 inst 是否存在
    """

    def __init__(self, inst: Instrumentation | None = None):
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """默认使用类名作为 Step 名称。"""
        return self.__class__.__name__

    def timed(self):
        """
        Step 级 scope（record=False，不进入 timeline）
        """
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: ConvertContext) -> ConvertContext:
        raise NotImplementedError
