"""
PackFetch 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp


class PackFetchError(Exception):
    """PackFetch 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}
        self.cause = cause
        if cause is not None:
            self.context.setdefault("cause", f"{type(cause).__name__}: {cause}")

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(PackFetchError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class PackNotFoundError(PackFetchError):
    """本地安装包中不存在请求的资源"""

    def _get_default_code(self) -> str:
        return "E404"


class PackResourceError(PackFetchError):
    """读取、写入或连接失败（本地文件系统或远程传输）"""

    def _get_default_code(self) -> str:
        return "E300"


class PackInterruptedError(PackFetchError):
    """
    传输中断

    与一般 I/O 错误区分，调用方可据此区分"用户取消"与"网络故障"。
    """

    def _get_default_code(self) -> str:
        return "E301"


class ChecksumMismatchError(PackFetchError):
    """
    下载文件的摘要与远程仓库给出的不一致

    属于完整性错误，不是 PackResourceError 的子类。
    """

    def _get_default_code(self) -> str:
        return "E302"


class AlgorithmUnavailableError(PackFetchError):
    """当前运行环境不支持配置的摘要算法"""

    def _get_default_code(self) -> str:
        return "E303"


# 视为"传输中断"的底层异常，映射为 PackInterruptedError
INTERRUPTED_ERRORS = (
    aiohttp.ClientPayloadError,
    aiohttp.ServerDisconnectedError,
    asyncio.TimeoutError,
    InterruptedError,
)


__all__ = [
    "INTERRUPTED_ERRORS",
    "PackFetchError",
    "ConfigError",
    "PackNotFoundError",
    "PackResourceError",
    "PackInterruptedError",
    "ChecksumMismatchError",
    "AlgorithmUnavailableError",
]
