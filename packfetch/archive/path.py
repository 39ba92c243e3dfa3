"""
虚拟档案路径

构造与解析 `jar:file:<路径>!/<条目>` 形式的地址，每一层嵌套对应一个 `jar:` 前缀。
"""

import re
from typing import List, Tuple

from packfetch.exceptions import PackResourceError

ARCHIVE_SCHEME = "jar:"
FILE_SCHEME = "file:"
ENTRY_SEPARATOR = "!/"

_DRIVE_PATH = re.compile(r"^/[A-Za-z]:")


def file_location(path: str, windows: bool = False) -> str:
    """
    本地文件的 file: 地址

    盘符式平台需要在 file: 之后额外插入一个分隔符，路径本身按原样输出。
    """
    separator = "/" if windows else ""
    return f"{FILE_SCHEME}{separator}{path}"


def build_virtual_path(location: str, *entries: str) -> str:
    """
    构造虚拟档案路径

    Args:
        location: 最外层档案的地址（如 file:/install/p.jar）
        entries: 由外到内的条目路径，最后一个为要读取的条目。
            解析时从右向左切分，档案路径本身可以含有 "!/"，条目不可以

    Returns:
        虚拟档案路径

    Raises:
        PackResourceError: 条目中含有 "!/"
    """
    if not entries:
        raise ValueError("至少需要一个条目")
    for entry in entries:
        if ENTRY_SEPARATOR in entry:
            raise PackResourceError(
                f"条目中不能包含 {ENTRY_SEPARATOR}: {entry}",
                context={"location": location, "entry": entry},
            )
    suffix = "".join(f"{ENTRY_SEPARATOR}{entry}" for entry in entries)
    return f"{ARCHIVE_SCHEME * len(entries)}{location}{suffix}"


def parse_virtual_path(path: str, windows: bool = False) -> Tuple[str, List[str]]:
    """
    解析虚拟档案路径

    Returns:
        tuple: (最外层档案的本地路径, 由外到内的条目列表)

    Raises:
        PackResourceError: 地址格式错误
    """
    depth = 0
    rest = path
    while rest.startswith(ARCHIVE_SCHEME):
        rest = rest[len(ARCHIVE_SCHEME) :]
        depth += 1

    if depth == 0:
        raise PackResourceError("不是档案地址", context={"path": path})

    parts = rest.rsplit(ENTRY_SEPARATOR, depth)
    if len(parts) != depth + 1 or not all(parts[1:]):
        raise PackResourceError("档案地址条目数与嵌套层数不符", context={"path": path})

    location, entries = parts[0], parts[1:]
    return _location_to_path(location, windows, path), entries


def _location_to_path(location: str, windows: bool, original: str) -> str:
    if not location.startswith(FILE_SCHEME):
        raise PackResourceError(
            "只支持 file: 地址", context={"path": original, "location": location}
        )
    local = location[len(FILE_SCHEME) :]
    # file:/C:\install\p.jar -> C:\install\p.jar
    if windows and _DRIVE_PATH.match(local):
        local = local[1:]
    if not local:
        raise PackResourceError("档案地址缺少文件路径", context={"path": original})
    return local
