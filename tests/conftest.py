import hashlib
import io
import zipfile
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from loguru import logger


def build_pack_jar(entries: Dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive holding the given entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


class FakeRepository:
    """Web pack repository served by an in-process aiohttp app."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.requests: List[str] = []
        self.base_url = ""

    def add_pack(
        self,
        encoded_name: str,
        data: bytes,
        checksum: Optional[str] = None,
        suffix: str = ".jar",
        algorithm: str = "md5",
    ) -> str:
        digest = checksum or hashlib.new(algorithm, data).hexdigest()
        self.files[f"/{encoded_name}{suffix}"] = data
        self.files[f"/{encoded_name}/checksum/{algorithm}"] = f'"{digest}"\n'.encode()
        return digest

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.raw_path)
        data = self.files.get(request.raw_path)
        if data is None:
            return web.Response(status=404, text="not found")
        return web.Response(body=data)


class StubContent:
    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error

    async def iter_chunked(self, n):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


class StubResponse:
    def __init__(self, status=200, text="", chunks=(), error=None):
        self.status = status
        self.headers = {"Content-Length": str(sum(len(c) for c in chunks))}
        self.content = StubContent(chunks, error)
        self._text = text

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class StubSession:
    """Stands in for aiohttp.ClientSession to inject transport failures."""

    def __init__(
        self,
        checksum: str = "0" * 32,
        chunks=(b"partial",),
        payload_error: Optional[BaseException] = None,
        connect_error: Optional[BaseException] = None,
        checksum_error: Optional[BaseException] = None,
    ):
        self.checksum = checksum
        self.chunks = chunks
        self.payload_error = payload_error
        self.connect_error = connect_error
        self.checksum_error = checksum_error
        self.urls: List[str] = []
        self.closed = False

    def get(self, url, **kwargs):
        self.urls.append(url)
        if "/checksum/" in url:
            if self.checksum_error is not None:
                raise self.checksum_error
            return StubResponse(text=self.checksum)
        if self.connect_error is not None:
            raise self.connect_error
        return StubResponse(chunks=self.chunks, error=self.payload_error)

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers a test installed so later tests never write to closed sinks."""
    yield
    logger.remove()


@pytest.fixture
def make_pack():
    return build_pack_jar


@pytest.fixture
def stub_session():
    return StubSession


@pytest_asyncio.fixture
async def repository():
    repo = FakeRepository()
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", repo.handle)
    server = TestServer(app)
    await server.start_server()
    repo.base_url = f"http://{server.host}:{server.port}"
    yield repo
    await server.close()


@pytest.fixture
def dirs(tmp_path: Path) -> Dict[str, Path]:
    install = tmp_path / "install"
    install.mkdir()
    return {
        "install": install,
        "uninstaller": tmp_path / "uninstaller",
        "archive": tmp_path / "installer.jar",
    }
