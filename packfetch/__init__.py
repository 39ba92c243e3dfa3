"""
PackFetch

把安装过程中请求的安装包解析为可读字节流：安装档案内置、随安装程序分发或从 Web 仓库下载。
"""

from packfetch.exceptions import (
    AlgorithmUnavailableError,
    ChecksumMismatchError,
    ConfigError,
    PackFetchError,
    PackInterruptedError,
    PackNotFoundError,
    PackResourceError,
)
from packfetch.models import (
    ChecksumRecord,
    ResolutionContext,
    StagedPack,
    TransferMode,
)
from packfetch.services import PackResourceResolver, PackSource, WebPackSource

__version__ = "0.1.0"

__all__ = [
    "PackResourceResolver",
    "PackSource",
    "WebPackSource",
    "ResolutionContext",
    "TransferMode",
    "StagedPack",
    "ChecksumRecord",
    "PackFetchError",
    "ConfigError",
    "PackNotFoundError",
    "PackResourceError",
    "PackInterruptedError",
    "ChecksumMismatchError",
    "AlgorithmUnavailableError",
]
