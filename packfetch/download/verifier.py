"""
文件校验器

计算本地文件的摘要，并与远程仓库给出的期望值比较。
"""

import hashlib
import os

import aiofiles

from packfetch.exceptions import AlgorithmUnavailableError, PackResourceError

# 摘要计算时每次读取的字节数
CHUNK_SIZE = 1024


class DigestVerifier:
    """
    文件摘要校验器

    注意：默认的 md5 只能发现传输损坏，不能防止恶意篡改。
    """

    def __init__(self, algorithm: str = "md5"):
        self.algorithm = algorithm.lower()
        try:
            sample = hashlib.new(self.algorithm)
        except ValueError as e:
            raise AlgorithmUnavailableError(
                f"不支持的摘要算法: {algorithm}",
                context={"algorithm": algorithm},
                cause=e,
            ) from e
        # shake_* 等变长摘要没有固定的十六进制形式，无法与远程校验值比较
        if sample.digest_size == 0:
            raise AlgorithmUnavailableError(
                f"不支持变长摘要算法: {algorithm}",
                context={"algorithm": algorithm},
            )

    async def digest_of(self, file_path: str) -> str:
        """
        计算文件摘要

        Args:
            file_path: 文件路径

        Returns:
            小写十六进制摘要
        """
        digest = hashlib.new(self.algorithm)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    data = await f.read(CHUNK_SIZE)
                    if not data:
                        break
                    digest.update(data)
        except OSError as e:
            raise PackResourceError(
                f"读取文件失败: {os.path.basename(file_path)}",
                context={"file": str(file_path)},
                cause=e,
            ) from e
        return digest.hexdigest()

    async def verify(self, file_path: str, expected_digest: str) -> bool:
        """
        校验文件摘要是否匹配

        Args:
            file_path: 文件路径
            expected_digest: 期望的摘要（大小写不敏感）

        Returns:
            是否匹配
        """
        current = await self.digest_of(file_path)
        return current == expected_digest.strip().lower()
