"""
档案条目读取

打开任意嵌套深度的档案条目，以及安装程序自身的本地档案。
"""

import io
import zipfile
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from loguru import logger

from packfetch.archive.path import parse_virtual_path
from packfetch.exceptions import PackNotFoundError, PackResourceError


def open_archive_entry(archive: Union[str, Path], entries: List[str]) -> BinaryIO:
    """
    打开档案中的条目

    Args:
        archive: 最外层档案的本地路径
        entries: 由外到内的条目路径；除最后一个外均为内层档案

    Returns:
        条目的只读字节流，由调用方负责关闭

    Raises:
        PackNotFoundError: 条目不存在
        PackResourceError: 档案无法读取
    """
    context = {"archive": str(archive), "entries": list(entries)}
    try:
        zf = zipfile.ZipFile(archive)
    except (OSError, zipfile.BadZipFile) as e:
        raise PackResourceError(
            f"无法打开档案: {archive}", context=context, cause=e
        ) from e

    current = entries[0]
    try:
        for inner in entries[:-1]:
            current = inner
            data = zf.read(inner)
            zf.close()
            zf = zipfile.ZipFile(io.BytesIO(data))
        current = entries[-1]
        # 条目流持有档案文件的引用，关闭 ZipFile 不影响读取
        return zf.open(current)
    except KeyError as e:
        raise PackNotFoundError(
            f"档案中不存在条目: {current}",
            context={**context, "missing": current},
            cause=e,
        ) from e
    except (OSError, zipfile.BadZipFile) as e:
        raise PackResourceError(
            f"读取档案失败: {archive}", context=context, cause=e
        ) from e
    finally:
        zf.close()


def open_virtual_path(path: str, windows: bool = False) -> BinaryIO:
    """打开虚拟档案路径指向的条目"""
    archive, entries = parse_virtual_path(path, windows)
    logger.debug(f"[档案] 打开 {path}")
    return open_archive_entry(archive, entries)


class ArchiveResources:
    """安装程序自身的本地档案"""

    def __init__(self, archive_path: Optional[Union[str, Path]]):
        self.archive_path = archive_path

    def get_input_stream(self, name: str) -> BinaryIO:
        """
        读取档案中的资源

        Raises:
            PackNotFoundError: 资源不存在
            PackResourceError: 未配置档案或档案无法读取
        """
        if self.archive_path is None:
            raise PackResourceError(
                "未配置安装档案", context={"resource": name}
            )
        return open_archive_entry(self.archive_path, [name])
