#!filepath: fmconvert/utils/logger.py
import os
import sys
from loguru import logger


class Logging:
    """
    转换工具日志模块
    ---------------------------------------
    - 文件 sink：按日期切割 + 保留周期
    - 可选 stderr sink（CLI 使用）
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console: bool = False,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.console = console
        self._configured = False

    def _configure(self) -> None:
        """
        配置全局 logger，只执行一次（首次写日志时触发）
        """
        logger.remove()

        os.makedirs(self.log_dir, exist_ok=True)
        logger.add(
            sink=f"{self.log_dir}/fmconvert_{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            backtrace=True,
            diagnose=False,
        )

        if self.console:
            logger.add(
                sink=sys.stderr,
                level=self.level,
                format="<level>{level: <7}</level> | {message}",
            )

        self._configured = True

    def reconfigure(
        self,
        log_dir: str | None = None,
        rotation: str | None = None,
        retention: str | None = None,
        log_level: str | None = None,
        console: bool | None = None,
    ) -> None:
        """
        用配置覆盖默认参数并立刻重建 sink。
        """
        if log_dir is not None:
            self.log_dir = log_dir
        if rotation is not None:
            self.rotation = rotation
        if retention is not None:
            self.retention = retention
        if log_level is not None:
            self.level = log_level
        if console is not None:
            self.console = console
        self._configure()

    def _ensure(self) -> None:
        if not self._configured:
            self._configure()

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._ensure()
        logger.error(msg, *args, **kwargs)


# 默认全局 logs（可被 init_logging 重新配置）
logs = Logging(
    log_dir=os.getenv("FMCONVERT_LOG_DIR", "logs"),
    log_level=os.getenv("FMCONVERT_LOG_LEVEL", "INFO"),
)


def init_logging(cfg) -> Logging:
    """
    使用 LogConfig 重新配置全局 logs。
    """
    logs.reconfigure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level=cfg.level,
        console=cfg.console,
    )
    return logs
