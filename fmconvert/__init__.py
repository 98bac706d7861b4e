#!filepath: fmconvert/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.filesystem import FileSystem
from .utils.errors import ConvertError, ConvertIOError, ParseError, ConsistencyFault
from .config.app_config import AppConfig

__version__ = "0.1.0"

from .workflows.convert_workflow import build_convert_pipeline, convert_file  # noqa: E402

__all__ = [
    "logs", "Logging", "init_logging",
    "FileSystem",
    "AppConfig",
    "ConvertError", "ConvertIOError", "ParseError", "ConsistencyFault",
    "build_convert_pipeline", "convert_file",
    "__version__",
]
