from .app_config import AppConfig
from .convert_config import ConvertConfig
from .log_config import LogConfig

__all__ = ["AppConfig", "ConvertConfig", "LogConfig"]
