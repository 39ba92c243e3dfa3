"""
CLI 模块

诊断用命令行：解析单个安装包并把字节流写入文件。
"""

import asyncio
import shutil
from typing import Optional

import click
from loguru import logger

from packfetch.config import load_context
from packfetch.exceptions import PackFetchError, PackInterruptedError
from packfetch.logger import setup_logger
from packfetch.services import PackResourceResolver


async def run_async(config_path: str, pack_name: str, output: str) -> int:
    """解析安装包并写入 output，返回写入的字节数"""
    context = load_context(config_path)
    async with PackResourceResolver(context) as resolver:
        stream = await resolver.resolve(pack_name)
        with stream, open(output, "wb") as out:
            shutil.copyfileobj(stream, out)
            return out.tell()


@click.command()
@click.argument("config", type=click.Path(exists=True))
@click.argument("pack")
@click.option("-o", "--output", help="输出文件（默认为 <PACK>.pack）")
@click.option("--debug", is_flag=True, help="启用调试模式（也可设置 PACKFETCH_DEBUG=1）")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    help="额外写入完整 DEBUG 日志的文件",
)
@click.version_option(version="0.1.0")
def main(
    config: str,
    pack: str,
    output: Optional[str],
    debug: bool,
    log_file: Optional[str],
):
    """PackFetch - 安装包资源解析工具"""
    setup_logger(debug=debug, log_file=log_file)

    output = output or f"{pack}.pack"
    try:
        size = asyncio.run(run_async(config, pack, output))
    except PackInterruptedError as e:
        logger.warning(f"下载被中断: {e}")
        raise click.ClickException(str(e))
    except PackFetchError as e:
        logger.error(f"解析失败: {e}")
        raise click.ClickException(str(e))

    logger.success(f"完成! '{pack}' 已写入 {output} ({size} 字节)")


if __name__ == "__main__":
    main()
