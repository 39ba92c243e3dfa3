import asyncio
from typing import Awaitable, Callable, TypeVar
from urllib.parse import quote

from loguru import logger

from packfetch.exceptions import PackResourceError

T = TypeVar("T")


def encode_pack_name(name: str) -> str:
    """安装包名在远程地址中的编码形式（空格编码为 %20）"""
    return quote(name, safe="")


async def with_retries(
    operation: Callable[[], Awaitable[T]],
    description: str,
    max_retries: int = 0,
    retry_delay: float = 1.0,
) -> T:
    """
    执行网络操作，失败时按指数退避重试

    只重试 PackResourceError；中断、校验失败等错误直接抛出。
    max_retries 不大于 0 时只尝试一次。
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except PackResourceError as e:
            if attempt >= max_retries:
                raise
            delay = retry_delay * (2**attempt)
            logger.warning(
                f"[重试] {description} 失败 (第 {attempt + 1} 次): {e}. "
                f"{delay:.1f}s 后重试..."
            )
            await asyncio.sleep(delay)
            attempt += 1
