from __future__ import annotations

from fmconvert.observability.instrumentation import Instrumentation, NoOpInstrumentation


class BaseAdapter:
    """
    Adapter 的通用接口。

    - 持有 Instrumentation（可选，None → No-op）
    - 提供 timer() 方便在内部对关键区域计时
    """

    def __init__(self, inst: Instrumentation | None = None):
        self.inst = inst if inst is not None else NoOpInstrumentation()

    def timer(self, name: str = ''):
        """
        Adapter 内部计时：
            with adapter.timer("encode"):
                ...
        """
        if not name:
            name = self.__class__.__name__
        return self.inst.timer(name)
