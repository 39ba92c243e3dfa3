"""
安装包数据模型

定义暂存包、校验值记录等数据类。
"""

from dataclasses import dataclass
from pathlib import Path

# 安装包在安装档案中的条目前缀
PACK_ENTRY_PREFIX = "packs/pack-"


def pack_entry_name(name: str) -> str:
    """安装包在档案中的条目路径（不做任何编码）"""
    return f"{PACK_ENTRY_PREFIX}{name}"


def pack_file_name(name: str) -> str:
    """安装包在安装目录中的文件名"""
    return f"{name}.jar"


@dataclass(frozen=True)
class ChecksumRecord:
    """
    远程仓库给出的校验值

    每次下载时获取，不跨进程持久化。
    """

    algorithm: str
    digest: str

    def matches(self, actual: str) -> bool:
        """与实际摘要比较（忽略大小写与首尾空白）"""
        return self.digest.strip().lower() == actual.strip().lower()


@dataclass(frozen=True)
class StagedPack:
    """已校验并放入安装目录的安装包"""

    name: str
    path: Path
    virtual_path: str
    downloaded: bool = True

    @property
    def entry_name(self) -> str:
        return pack_entry_name(self.name)
