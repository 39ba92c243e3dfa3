import hashlib
from pathlib import Path

import pytest

from packfetch.download import DigestVerifier
from packfetch.download.verifier import CHUNK_SIZE
from packfetch.exceptions import AlgorithmUnavailableError, PackResourceError


@pytest.mark.asyncio
async def test_md5_digest(tmp_path: Path):
    path = tmp_path / "pack.jar"
    path.write_bytes(b"hello world")

    digest = await DigestVerifier().digest_of(str(path))

    assert digest == "5eb63bbbe01eeed093cb22bb8f5acdc3"


@pytest.mark.asyncio
async def test_empty_file(tmp_path: Path):
    path = tmp_path / "empty.jar"
    path.write_bytes(b"")

    assert await DigestVerifier().digest_of(str(path)) == (
        "d41d8cd98f00b204e9800998ecf8427e"
    )


@pytest.mark.asyncio
async def test_file_larger_than_chunk(tmp_path: Path):
    data = bytes(range(256)) * (CHUNK_SIZE // 64 + 3)
    path = tmp_path / "big.jar"
    path.write_bytes(data)

    assert await DigestVerifier().digest_of(str(path)) == hashlib.md5(data).hexdigest()


@pytest.mark.asyncio
async def test_verify_is_case_tolerant(tmp_path: Path):
    path = tmp_path / "pack.jar"
    path.write_bytes(b"hello world")
    verifier = DigestVerifier()

    assert await verifier.verify(str(path), "5EB63BBBE01EEED093CB22BB8F5ACDC3\n")
    assert not await verifier.verify(str(path), "d41d8cd98f00b204e9800998ecf8427e")


@pytest.mark.asyncio
async def test_other_algorithm(tmp_path: Path):
    path = tmp_path / "pack.jar"
    path.write_bytes(b"hello world")

    digest = await DigestVerifier("SHA256").digest_of(str(path))

    assert digest == hashlib.sha256(b"hello world").hexdigest()


def test_unknown_algorithm():
    with pytest.raises(AlgorithmUnavailableError) as exc_info:
        DigestVerifier("md42")
    assert exc_info.value.context["algorithm"] == "md42"


@pytest.mark.parametrize("algorithm", ["shake_128", "SHAKE_256"])
def test_variable_length_algorithm_is_rejected(algorithm):
    with pytest.raises(AlgorithmUnavailableError) as exc_info:
        DigestVerifier(algorithm)
    assert exc_info.value.context["algorithm"] == algorithm


@pytest.mark.asyncio
async def test_missing_file(tmp_path: Path):
    with pytest.raises(PackResourceError):
        await DigestVerifier().digest_of(str(tmp_path / "missing.jar"))
