from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger

_T = TypeVar("_T")

logger = get_logger("retry_policy")


def _retryable(exc: BaseException) -> bool:
    return isinstance(exc, ApiError) and exc.retryable


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "Retrying API call",
        attempt=state.attempt_number,
        error_kind=exc.kind.value if isinstance(exc, ApiError) else None,
        error_status=getattr(exc, "status_code", None),
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff with jitter for retryable ApiErrors.

    ``max_retries`` counts retries, not attempts: 0 means a single call.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0

    async def run(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        async for attempt in self._retrying():
            with attempt:
                return await fn()
        raise AssertionError("retry loop exited without a result")

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(_retryable),
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential_jitter(initial=self.base_delay, max=self.max_delay),
            before_sleep=_log_retry,
            reraise=True,
        )


NO_RETRY = RetryPolicy(max_retries=0)
