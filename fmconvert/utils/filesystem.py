#!filepath: fmconvert/utils/filesystem.py
import os
from pathlib import Path
from typing import Tuple

from fmconvert.utils.logger import logs


class FileSystem:
    """
    统一文件系统工具
    - 自动创建目录
    - 文件大小 / 指纹
    - 删除文件
    """

    @staticmethod
    def ensure_dir(path: str | Path) -> Path:
        """
        创建目录（如果不存在）
        """
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[FS] 创建目录: {p}")
        return p

    @staticmethod
    def file_exists(path: str | Path) -> bool:
        return Path(path).exists()

    @staticmethod
    def get_file_size(path: str | Path) -> int:
        """
        返回文件大小（字节），不存在返回 0
        """
        p = Path(path)
        if not p.exists():
            return 0
        return p.stat().st_size

    @staticmethod
    def fingerprint(path: str | Path) -> Tuple[int, int]:
        """
        (size, mtime_ns)：用于判断两遍读取之间文件是否被修改
        """
        st = os.stat(path)
        return st.st_size, st.st_mtime_ns

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """
        将字节转换为可读格式（GB / MB）
        """
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size_bytes < 1024:
                return f"{size_bytes:.2f} {unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f} PB"

    @staticmethod
    def remove_file(path: str | Path) -> bool:
        """
        只删除普通文件；目录 / 不存在的路径保持不动，返回是否删除
        """
        p = Path(path)

        if not p.is_file():
            logs.warning(f"[FS] 非普通文件，跳过删除: {p}")
            return False

        p.unlink()
        logs.debug(f"[FS] 删除文件: {p}")
        return True
