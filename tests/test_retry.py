import pytest

from ircwire.errors import NetworkError, ParsingError
from ircwire.utils.retry import RetryExhaustedError, retry_async


@pytest.mark.asyncio
async def test_retry_succeeds_after_failures():
    seen = []

    async def op(attempt):
        seen.append(attempt)
        if attempt < 3:
            raise NetworkError("transient")
        return "ok"

    failures = []
    result = await retry_async(
        op, max_attempts=5, base_delay=0, on_failure=lambda n, e: failures.append(n)
    )
    assert result == "ok"
    assert seen == [1, 2, 3]
    assert failures == [1, 2]


@pytest.mark.asyncio
async def test_retry_exhausted():
    async def op(attempt):
        raise NetworkError(f"fail {attempt}")

    with pytest.raises(RetryExhaustedError) as info:
        await retry_async(op, max_attempts=2, base_delay=0)
    assert info.value.attempts == 2
    assert str(info.value.final_exception) == "fail 2"


@pytest.mark.asyncio
async def test_non_retryable_error_propagates_immediately():
    calls = []

    async def op(attempt):
        calls.append(attempt)
        raise ParsingError("bad")

    with pytest.raises(ParsingError):
        await retry_async(op, max_attempts=4, base_delay=0)
    assert calls == [1]


@pytest.mark.asyncio
async def test_raw_transport_errors_are_retried_by_default():
    calls = []

    async def op(attempt):
        calls.append(attempt)
        if attempt == 1:
            raise ConnectionResetError("reset")
        return attempt

    assert await retry_async(op, max_attempts=3, base_delay=0) == 2
    assert calls == [1, 2]


@pytest.mark.asyncio
async def test_custom_retry_predicate():
    calls = []

    async def op(attempt):
        calls.append(attempt)
        raise NetworkError("never retried here")

    with pytest.raises(NetworkError):
        await retry_async(op, max_attempts=3, base_delay=0, should_retry=lambda e: False)
    assert calls == [1]
