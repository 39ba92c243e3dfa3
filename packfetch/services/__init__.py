"""
PackFetch 服务层

包含业务逻辑服务：安装包解析、远程来源、安装目录暂存。
"""

from packfetch.services.resolver import PackResourceResolver
from packfetch.services.stager import CacheStager
from packfetch.services.web_source import PackSource, WebPackSource

__all__ = [
    "PackResourceResolver",
    "CacheStager",
    "PackSource",
    "WebPackSource",
]
