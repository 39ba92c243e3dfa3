import pytest

from packfetch.exceptions import ChecksumMismatchError, PackResourceError
from packfetch.utils import encode_pack_name, with_retries


@pytest.mark.parametrize(
    "name, expected",
    [("core", "core"), ("My Pack", "My%20Pack"), ("a/b", "a%2Fb")],
)
def test_encode_pack_name(name, expected):
    assert encode_pack_name(name) == expected


@pytest.mark.asyncio
async def test_succeeds_after_retry():
    attempts = []

    async def flaky():
        attempts.append(1)
        if len(attempts) < 2:
            raise PackResourceError("temporary")
        return "ok"

    assert await with_retries(flaky, "flaky", max_retries=2, retry_delay=0) == "ok"
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_single_attempt_by_default():
    attempts = []

    async def failing():
        attempts.append(1)
        raise PackResourceError("down")

    with pytest.raises(PackResourceError):
        await with_retries(failing, "failing")
    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_integrity_errors_are_not_retried():
    attempts = []

    async def corrupt():
        attempts.append(1)
        raise ChecksumMismatchError("bad digest")

    with pytest.raises(ChecksumMismatchError):
        await with_retries(corrupt, "corrupt", max_retries=5, retry_delay=0)
    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_negative_retries_still_raise_the_failure():
    attempts = []

    async def failing():
        attempts.append(1)
        raise PackResourceError("down")

    with pytest.raises(PackResourceError):
        await with_retries(failing, "failing", max_retries=-1, retry_delay=0)
    assert len(attempts) == 1
