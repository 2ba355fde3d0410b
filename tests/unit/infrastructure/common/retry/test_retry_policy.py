from unittest.mock import AsyncMock

import pytest

from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.common.retry.retry_policy import NO_RETRY, RetryPolicy

FAST = RetryPolicy(max_retries=2, base_delay=0, max_delay=0)


def transient() -> ApiError:
    return ApiError(ErrorKind.TRANSPORT, "connection reset", retryable=True)


@pytest.mark.asyncio
async def test_retries_until_success() -> None:
    fn = AsyncMock(side_effect=[transient(), "ok"])

    assert await FAST.run(fn) == "ok"
    assert fn.await_count == 2


@pytest.mark.asyncio
async def test_reraises_last_error_when_exhausted() -> None:
    fn = AsyncMock(side_effect=[transient(), transient(), transient()])

    with pytest.raises(ApiError) as excinfo:
        await FAST.run(fn)

    assert excinfo.value.kind is ErrorKind.TRANSPORT
    assert fn.await_count == 3


@pytest.mark.asyncio
async def test_non_retryable_error_fails_fast() -> None:
    fn = AsyncMock(side_effect=ApiError(ErrorKind.VALIDATION, "bad input", status_code=400))

    with pytest.raises(ApiError):
        await FAST.run(fn)

    assert fn.await_count == 1


@pytest.mark.asyncio
async def test_other_exceptions_are_not_retried() -> None:
    fn = AsyncMock(side_effect=KeyError("data"))

    with pytest.raises(KeyError):
        await FAST.run(fn)

    assert fn.await_count == 1


@pytest.mark.asyncio
async def test_no_retry_policy_makes_single_attempt() -> None:
    fn = AsyncMock(side_effect=transient())

    with pytest.raises(ApiError):
        await NO_RETRY.run(fn)

    assert fn.await_count == 1


@pytest.mark.asyncio
async def test_awaits_coroutine_returned_by_plain_callable() -> None:
    fn = AsyncMock(side_effect=[transient(), "ok"])

    assert await FAST.run(lambda: fn()) == "ok"
    assert fn.await_count == 2
