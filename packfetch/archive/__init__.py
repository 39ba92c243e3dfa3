"""
PackFetch 档案层

包含虚拟档案路径的构造、解析与条目读取。
"""

from packfetch.archive.path import (
    build_virtual_path,
    file_location,
    parse_virtual_path,
)
from packfetch.archive.reader import (
    ArchiveResources,
    open_archive_entry,
    open_virtual_path,
)

__all__ = [
    "build_virtual_path",
    "file_location",
    "parse_virtual_path",
    "ArchiveResources",
    "open_archive_entry",
    "open_virtual_path",
]
