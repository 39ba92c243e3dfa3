"""
日志配置

命令行入口在启动时调用 setup_logger；库代码只使用 loguru.logger，
不主动添加任何 handler。
"""

import os
import sys
from typing import Optional

from loguru import logger

DEBUG_ENV = "PACKFETCH_DEBUG"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"


def debug_enabled(debug: bool = False) -> bool:
    """--debug 或 PACKFETCH_DEBUG=1 任一成立即为调试模式"""
    return debug or os.environ.get(DEBUG_ENV, "0") == "1"


def setup_logger(
    debug: bool = False,
    log_file: Optional[str] = None,
    sink=None,
) -> None:
    """
    配置日志输出

    Args:
        debug: 是否输出 DEBUG 级别日志（下载进度、校验 URL 等）
        log_file: 额外写入的日志文件，始终记录 DEBUG 级别，便于安装失败后排查
        sink: 终端输出目标，默认为 stderr，避免与写入 stdout 的数据混在一起
    """
    debug = debug_enabled(debug)
    level = "DEBUG" if debug else "INFO"
    sink = sys.stderr if sink is None else sink

    logger.remove()
    logger.add(
        sink,
        format=LOG_FORMAT,
        level=level,
        # 重定向到文件或管道时不输出颜色控制符
        colorize=bool(getattr(sink, "isatty", lambda: False)()),
        backtrace=debug,
        diagnose=debug,
    )

    if log_file:
        logger.add(
            log_file,
            format=LOG_FORMAT,
            level="DEBUG",
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
        )

    logger.debug(f"[日志] 级别: {level}" + (f"，日志文件: {log_file}" if log_file else ""))


__all__ = ["logger", "setup_logger", "debug_enabled"]
