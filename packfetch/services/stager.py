"""
暂存服务

把已校验的临时文件放入安装目录，并构造指向其中安装包条目的虚拟路径。
"""

import os
import shutil
from pathlib import Path
from typing import Union

from loguru import logger

from packfetch.archive import build_virtual_path, file_location
from packfetch.exceptions import PackResourceError
from packfetch.models import TransferMode, pack_entry_name


class CacheStager:
    """安装目录暂存器"""

    def __init__(self, install_path: Union[str, Path], windows: bool = False):
        self.install_path = Path(install_path)
        self.windows = windows

    def stage(
        self,
        verified_temp_path: Union[str, Path],
        target_file_name: str,
        mode: TransferMode,
    ) -> Path:
        """
        暂存已校验的文件

        Args:
            verified_temp_path: 已通过校验的临时文件
            target_file_name: 安装目录中的文件名
            mode: 传输方式

        Returns:
            最终路径

        Raises:
            PackResourceError: 移动或复制失败
        """
        source = Path(verified_temp_path)
        target = self.install_path / target_file_name

        try:
            self.install_path.mkdir(parents=True, exist_ok=True)
            if mode is TransferMode.MOVE_REPLACE:
                # 同一文件系统内为原子替换
                os.replace(source, target)
            else:
                self._copy(source, target)
                # 非原子操作：复制与删除之间崩溃会留下多余的临时文件，但已暂存的副本完整
                os.remove(source)
        except OSError as e:
            raise PackResourceError(
                f"暂存失败: {target_file_name}",
                context={
                    "source": str(source),
                    "target": str(target),
                    "mode": mode.value,
                },
                cause=e,
            ) from e

        logger.info(f"[暂存] {target_file_name} -> {target} ({mode.value})")
        return target.absolute()

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        try:
            shutil.copyfile(source, target)
        except OSError:
            # 不完整的副本不能留在安装目录
            if target.exists():
                target.unlink()
            raise

    def virtual_path(self, staged_path: Union[str, Path], pack_name: str) -> str:
        """
        构造指向暂存文件中安装包条目的虚拟路径

        例如 Windows 下 C:\\install\\p.jar 得到
        jar:file:/C:\\install\\p.jar!/packs/pack-p
        """
        return build_virtual_path(
            file_location(str(staged_path), self.windows), pack_entry_name(pack_name)
        )
