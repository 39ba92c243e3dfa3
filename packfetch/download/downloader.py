"""
安装包下载器

把远程安装包的字节流写入本地临时文件，不做校验。
"""

import asyncio
import os
from typing import Callable, Optional

import aiofiles
import aiohttp
from loguru import logger

from packfetch.exceptions import (
    INTERRUPTED_ERRORS,
    PackInterruptedError,
    PackResourceError,
)

# 传输缓冲区大小，1MB
BUFFER_SIZE = 1_000_000


class PackDownloader:
    """安装包下载器"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ):
        self._session = session
        self._owned_session = session is None
        self._progress_callback = progress_callback

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owned_session = True
        return self._session

    async def download(self, url: str, destination: str) -> int:
        """
        下载单个安装包

        Args:
            url: 安装包地址
            destination: 本地临时文件路径（所在目录不存在时自动创建）

        Returns:
            写入的字节数

        Raises:
            PackInterruptedError: 传输中途被中断
            PackResourceError: 连接失败、状态码错误或写入失败
        """
        filename = os.path.basename(destination)
        context = {"url": url, "file": str(destination)}
        logger.info(f"[下载] 开始: {url}")

        try:
            os.makedirs(os.path.dirname(destination) or ".", exist_ok=True)

            async with self.session.get(url) as response:
                if response.status != 200:
                    raise PackResourceError(
                        f"HTTP {response.status}",
                        context={**context, "status": response.status},
                    )

                total_size = int(response.headers.get("Content-Length", 0))
                written = 0
                last_percent = 0.0

                async with aiofiles.open(destination, "wb") as f:
                    async for chunk in response.content.iter_chunked(BUFFER_SIZE):
                        await f.write(chunk)
                        written += len(chunk)

                        if total_size > 0:
                            percent = (written / total_size) * 100
                            if percent - last_percent >= 5:
                                if self._progress_callback:
                                    self._progress_callback(filename, percent)
                                logger.debug(f"[进度] {filename}: {percent:.1f}%")
                                last_percent = percent

        except INTERRUPTED_ERRORS as e:
            self._discard(destination)
            raise PackInterruptedError(
                f"下载被中断: {filename}", context=context, cause=e
            ) from e
        except PackResourceError:
            self._discard(destination)
            raise
        except (aiohttp.ClientError, OSError, ValueError) as e:
            self._discard(destination)
            raise PackResourceError(
                f"下载失败: {filename}", context=context, cause=e
            ) from e
        except asyncio.CancelledError:
            self._discard(destination)
            raise

        logger.info(f"[完成] '{filename}' 下载完成 ({written} 字节)")
        return written

    @staticmethod
    def _discard(path: str) -> None:
        """清理不完整的文件"""
        if os.path.exists(path):
            try:
                os.remove(path)
            except OSError as e:
                logger.warning(f"[清理] 无法删除临时文件 {path}: {e}")

    async def close(self):
        """关闭下载器"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
