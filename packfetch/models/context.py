"""
解析上下文模型

定义一次安装过程中资源解析器使用的只读配置。
"""

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from packfetch.exceptions import ConfigError

# 临时下载目录，相对于卸载程序目录
WEB_TEMP_SUBDIR = "PackWebTemp"

DEFAULT_UNINSTALLER_SUBDIR = "Uninstaller"


class TransferMode(Enum):
    """已校验的临时文件进入安装目录的方式"""

    MOVE_REPLACE = "move-replace"
    COPY_THEN_DELETE = "copy-then-delete"


@dataclass(frozen=True)
class ResolutionContext:
    """
    解析上下文

    由调用方（安装程序）在构造解析器时提供，解析器不会修改它。
    web_dir_url 为 None 表示只从本地安装包解析。
    """

    install_path: Path
    installer_archive: Optional[Path] = None
    web_dir_url: Optional[str] = None
    uninstaller_path: Optional[Path] = None
    platform: str = sys.platform
    transfer_mode: TransferMode = TransferMode.MOVE_REPLACE
    pack_url_suffix: str = ".jar"
    checksum_type: str = "md5"
    max_retries: int = 0
    retry_delay: float = 1.0

    def __post_init__(self):
        # 直接构造与 from_dict 走同一套校验，非法取值不会流入下载流程
        try:
            transfer_mode = TransferMode(self.transfer_mode)
        except ValueError:
            raise ConfigError(
                "transfer_mode 必须为 move-replace/copy-then-delete",
                context={"transfer_mode": self.transfer_mode},
            )
        object.__setattr__(self, "transfer_mode", transfer_mode)

        max_retries = self.max_retries
        if (
            isinstance(max_retries, bool)
            or not isinstance(max_retries, int)
            or max_retries < 0
        ):
            raise ConfigError(
                "max_retries 必须为非负整数", context={"max_retries": max_retries}
            )

        retry_delay = self.retry_delay
        if (
            isinstance(retry_delay, bool)
            or not isinstance(retry_delay, (int, float))
            or retry_delay < 0
        ):
            raise ConfigError(
                "retry_delay 必须为非负数", context={"retry_delay": retry_delay}
            )
        object.__setattr__(self, "retry_delay", float(retry_delay))

    @property
    def is_windows(self) -> bool:
        """当前平台是否使用盘符式绝对路径"""
        return self.platform.lower().startswith("win")

    @property
    def temp_dir(self) -> Path:
        """下载暂存目录"""
        base = self.uninstaller_path or (
            self.install_path / DEFAULT_UNINSTALLER_SUBDIR
        )
        return base / WEB_TEMP_SUBDIR

    @property
    def is_remote(self) -> bool:
        return self.web_dir_url is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolutionContext":
        """
        从字典创建解析上下文

        Args:
            data: 配置字典（键名与字段名一致，允许使用连字符）

        Returns:
            ResolutionContext 实例

        Raises:
            ConfigError: 缺少必填项或取值无效
        """
        data = {key.replace("-", "_"): value for key, value in data.items()}

        install_path = data.get("install_path")
        if not install_path:
            raise ConfigError("请配置 install_path")

        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(
                f"未知的配置项: {', '.join(sorted(unknown))}",
                context={"keys": sorted(unknown)},
            )

        web_dir_url = data.get("web_dir_url") or None
        if web_dir_url is not None:
            web_dir_url = str(web_dir_url).rstrip("/")

        return cls(
            install_path=_to_path(install_path),
            installer_archive=_to_path(data.get("installer_archive")),
            web_dir_url=web_dir_url,
            uninstaller_path=_to_path(data.get("uninstaller_path")),
            platform=data.get("platform") or sys.platform,
            transfer_mode=data.get("transfer_mode", TransferMode.MOVE_REPLACE),
            pack_url_suffix=data.get("pack_url_suffix", ".jar"),
            checksum_type=data.get("checksum_type", "md5"),
            max_retries=data.get("max_retries", 0),
            retry_delay=data.get("retry_delay", 1.0),
        )


def _to_path(value: Union[str, Path, None]) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value).expanduser()
