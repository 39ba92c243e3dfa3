"""
远程校验值获取

从仓库的元数据端点读取安装包的期望摘要。
"""

import asyncio
from typing import Optional

import aiohttp
from loguru import logger

from packfetch.exceptions import (
    INTERRUPTED_ERRORS,
    PackInterruptedError,
    PackResourceError,
)
from packfetch.models import ChecksumRecord


class RemoteChecksumFetcher:
    """远程校验值获取器"""

    def __init__(
        self,
        algorithm: str = "md5",
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.algorithm = algorithm.lower()
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owned_session = True
        return self._session

    def checksum_url(self, base_url: str) -> str:
        return f"{base_url}/checksum/{self.algorithm}"

    async def fetch_expected_checksum(self, base_url: str) -> str:
        """
        获取期望摘要

        Args:
            base_url: 安装包在仓库中的地址（不含后缀）

        Returns:
            服务器返回的摘要文本（去除空白与引号，保留原大小写）

        Raises:
            PackInterruptedError: 传输中途被中断
            PackResourceError: 传输失败或响应状态码不是 200
        """
        url = self.checksum_url(base_url)
        logger.debug(f"[校验] 获取校验值: {url}")
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise PackResourceError(
                        f"获取校验值失败 (状态码: {response.status})",
                        context={"url": url, "status": response.status},
                    )
                text = await response.text()
        except INTERRUPTED_ERRORS as e:
            raise PackInterruptedError(
                f"获取校验值被中断: {url}", context={"url": url}, cause=e
            ) from e
        except PackResourceError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise PackResourceError(
                f"获取校验值失败: {url}", context={"url": url}, cause=e
            ) from e

        return "".join(line.strip() for line in text.splitlines()).replace('"', "")

    async def fetch(self, base_url: str) -> ChecksumRecord:
        """获取期望摘要并包装为 ChecksumRecord"""
        digest = await self.fetch_expected_checksum(base_url)
        return ChecksumRecord(algorithm=self.algorithm, digest=digest)

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
