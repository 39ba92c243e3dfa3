"""
PackFetch 下载层

包含远程校验值获取、安装包下载、文件摘要校验等功能。
"""

from packfetch.download.checksum import RemoteChecksumFetcher
from packfetch.download.downloader import BUFFER_SIZE, PackDownloader
from packfetch.download.verifier import DigestVerifier

__all__ = [
    "RemoteChecksumFetcher",
    "PackDownloader",
    "DigestVerifier",
    "BUFFER_SIZE",
]
