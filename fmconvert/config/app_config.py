#!filepath: fmconvert/config/app_config.py
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .convert_config import ConvertConfig


def default_config_path() -> Path:
    """
    包内默认配置：fmconvert/config/base.yml
    """
    return Path(__file__).resolve().parent / "base.yml"


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    convert: ConvertConfig = Field(default_factory=ConvertConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 fmconvert/config/base.yml
        - .env 从当前工作目录读取（存在时）
        - FMCONVERT_LOG_LEVEL / FMCONVERT_LOG_DIR 覆盖 log 段
        """
        # 1) 先加载 .env
        load_dotenv(Path.cwd() / ".env")

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 环境变量覆盖
        log_raw = dict(raw.get("log") or {})
        if os.getenv("FMCONVERT_LOG_LEVEL"):
            log_raw["level"] = os.getenv("FMCONVERT_LOG_LEVEL")
        if os.getenv("FMCONVERT_LOG_DIR"):
            log_raw["dir"] = os.getenv("FMCONVERT_LOG_DIR")
        raw["log"] = log_raw

        return cls(**raw)
