"""
PackFetch 数据模型包

包含解析上下文和安装包模型定义。
"""

from packfetch.models.context import (
    DEFAULT_UNINSTALLER_SUBDIR,
    WEB_TEMP_SUBDIR,
    ResolutionContext,
    TransferMode,
)
from packfetch.models.pack import (
    PACK_ENTRY_PREFIX,
    ChecksumRecord,
    StagedPack,
    pack_entry_name,
    pack_file_name,
)

__all__ = [
    # 上下文模型
    "ResolutionContext",
    "TransferMode",
    "WEB_TEMP_SUBDIR",
    "DEFAULT_UNINSTALLER_SUBDIR",
    # 安装包模型
    "ChecksumRecord",
    "StagedPack",
    "PACK_ENTRY_PREFIX",
    "pack_entry_name",
    "pack_file_name",
]
