"""
安装包资源解析服务

根据安装包名返回可读字节流：先查本地，再从远程仓库下载。
"""

import os
from pathlib import Path
from typing import BinaryIO, Optional

from loguru import logger

from packfetch.archive import ArchiveResources, open_virtual_path
from packfetch.exceptions import PackNotFoundError, PackResourceError
from packfetch.models import (
    ResolutionContext,
    StagedPack,
    pack_entry_name,
    pack_file_name,
)
from packfetch.services.stager import CacheStager
from packfetch.services.web_source import PackSource, WebPackSource


class PackResourceResolver:
    """
    安装包资源解析器

    调用方负责关闭 resolve() 返回的字节流。
    """

    def __init__(
        self,
        context: ResolutionContext,
        resources: Optional[ArchiveResources] = None,
        source: Optional[PackSource] = None,
    ):
        self.context = context
        self.resources = resources or ArchiveResources(context.installer_archive)
        self._source = source
        self._owned_source = source is None
        self.stager = CacheStager(context.install_path, context.is_windows)

    @property
    def source(self) -> PackSource:
        """获取或创建远程安装包来源"""
        if self._source is None:
            self._source = WebPackSource(self.context)
        return self._source

    async def resolve(self, name: str) -> BinaryIO:
        """
        解析安装包

        Args:
            name: 安装包名

        Returns:
            安装包条目的字节流

        Raises:
            PackNotFoundError: 仅本地模式下条目不存在
            PackInterruptedError: 远程下载被中断
            ChecksumMismatchError: 下载内容校验失败
            AlgorithmUnavailableError: 不支持的摘要算法
            PackResourceError: 其他 I/O 错误
        """
        if not self.context.is_remote:
            logger.debug(f"[本地] 从安装档案读取 {pack_entry_name(name)}")
            return self.resources.get_input_stream(pack_entry_name(name))

        staged = self.find_local_pack(name)
        if staged is not None:
            logger.info(f"[本地] 找到本地安装包 {staged.path}")
        else:
            staged = await self.source.fetch_and_stage(name)

        return self._open(staged)

    def open_resource(self, name: str) -> BinaryIO:
        """读取安装档案中的其他资源（不经过远程仓库）"""
        return self.resources.get_input_stream(name)

    def find_local_pack(self, name: str) -> Optional[StagedPack]:
        """
        查找与安装程序一起分发（或之前已暂存）的安装包

        不检查远程是否有更新的版本。
        """
        path = Path(self.context.install_path) / pack_file_name(name)
        if not (path.is_file() and os.access(path, os.R_OK)):
            return None
        path = path.absolute()
        return StagedPack(
            name=name,
            path=path,
            virtual_path=self.stager.virtual_path(path, name),
            downloaded=False,
        )

    def _open(self, staged: StagedPack) -> BinaryIO:
        try:
            return open_virtual_path(staged.virtual_path, self.context.is_windows)
        except PackNotFoundError as e:
            # 暂存包中缺少条目属于一般资源错误
            raise PackResourceError(
                f"读取安装包失败: {staged.name}",
                context={"path": staged.virtual_path},
                cause=e,
            ) from e

    async def close(self) -> None:
        """关闭解析器持有的远程来源"""
        if self._owned_source and self._source is not None:
            await self._source.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
