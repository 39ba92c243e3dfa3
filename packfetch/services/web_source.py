"""
远程安装包来源

获取校验值、下载、校验并暂存远程仓库中的安装包。
"""

import os
from abc import ABC, abstractmethod
from typing import Callable, Optional

import aiohttp
from loguru import logger

from packfetch.download import DigestVerifier, PackDownloader, RemoteChecksumFetcher
from packfetch.exceptions import ChecksumMismatchError
from packfetch.models import ResolutionContext, StagedPack, pack_file_name
from packfetch.services.stager import CacheStager
from packfetch.utils import encode_pack_name, with_retries


class PackSource(ABC):
    """
    远程安装包来源

    解析器在本地找不到安装包时调用 fetch_and_stage，
    由实现负责下载、校验并放入安装目录。
    """

    @abstractmethod
    async def fetch_and_stage(self, name: str) -> StagedPack:
        """
        获取安装包并放入安装目录。
        """
        pass

    async def close(self) -> None:
        pass


class WebPackSource(PackSource):
    """Web 仓库安装包来源"""

    def __init__(
        self,
        context: ResolutionContext,
        session: Optional[aiohttp.ClientSession] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ):
        if context.web_dir_url is None:
            raise ValueError("WebPackSource 需要 web_dir_url")
        self.context = context
        self.verifier = DigestVerifier(context.checksum_type)
        # 未传入 session 时，获取器与下载器各自在首次请求时创建
        self.fetcher = RemoteChecksumFetcher(context.checksum_type, session)
        self.downloader = PackDownloader(session, progress_callback)
        self.stager = CacheStager(context.install_path, context.is_windows)

    def pack_base_url(self, name: str) -> str:
        return f"{self.context.web_dir_url}/{encode_pack_name(name)}"

    def pack_url(self, name: str) -> str:
        return self.pack_base_url(name) + self.context.pack_url_suffix

    async def fetch_and_stage(self, name: str) -> StagedPack:
        """
        下载并暂存远程安装包

        Raises:
            ChecksumMismatchError: 下载内容与期望摘要不一致
            PackInterruptedError: 下载被中断
            PackResourceError: 其他网络或文件错误
        """
        ctx = self.context
        base_url = self.pack_base_url(name)
        file_name = pack_file_name(name)
        temp_path = str(ctx.temp_dir / file_name)

        expected = await with_retries(
            lambda: self.fetcher.fetch(base_url),
            f"获取校验值 '{name}'",
            ctx.max_retries,
            ctx.retry_delay,
        )

        pack_url = self.pack_url(name)
        logger.info(f"[下载] 远程安装包 {pack_url}")
        await with_retries(
            lambda: self.downloader.download(pack_url, temp_path),
            f"下载 '{name}'",
            ctx.max_retries,
            ctx.retry_delay,
        )

        try:
            actual = await self.verifier.digest_of(temp_path)
            if not expected.matches(actual):
                raise ChecksumMismatchError(
                    f"文件校验值不匹配: {file_name}",
                    context={
                        "file": file_name,
                        "algorithm": expected.algorithm,
                        "expected": expected.digest,
                        "actual": actual,
                    },
                )
            logger.debug(f"[校验] {file_name} {expected.algorithm} 校验通过")

            staged_path = self.stager.stage(temp_path, file_name, ctx.transfer_mode)
        except BaseException:
            # 未暂存成功的临时文件一律丢弃，不作为缓存
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        return StagedPack(
            name=name,
            path=staged_path,
            virtual_path=self.stager.virtual_path(staged_path, name),
            downloaded=True,
        )

    async def close(self) -> None:
        """关闭获取器与下载器持有的 HTTP session"""
        await self.fetcher.close()
        await self.downloader.close()
