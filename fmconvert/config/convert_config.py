# fmconvert/config/convert_config.py
from typing import Literal

from pydantic import BaseModel, Field


class ConvertConfig(BaseModel):
    """
    转换行为配置（不影响输出格式）：

    - snapshot          : 输入快照策略
        auto   → 文件不超过 snapshot_max_mb 时读入内存，否则按路径重读并校验指纹
        memory → 总是读入内存
        none   → 总是按路径重读并校验指纹
    - overwrite         : False 时以独占模式创建输出（目标已存在则失败）
    - discard_on_failure: 失败后删除残缺输出
    - progress_every    : 编码阶段每 N 行报告一次进度（0 关闭）
    """

    snapshot: Literal["auto", "memory", "none"] = "auto"
    snapshot_max_mb: int = Field(default=256, ge=0)
    overwrite: bool = True
    discard_on_failure: bool = False
    progress_every: int = Field(default=1_000_000, ge=0)
    encoding: str = "utf-8"
