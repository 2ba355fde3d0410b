"""Turns unparseable 2xx payloads into ApiErrors.

Adapters map rows with ``from_payload``; a row missing ``id`` or carrying the
wrong type would otherwise escape as KeyError/TypeError past the orchestrators.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger

logger = get_logger("api_payload")

MALFORMED_RESPONSE = "Malformed response"


@contextmanager
def parsing_payload(endpoint: str) -> Iterator[None]:
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.warning(
            "Malformed API response",
            http_endpoint=endpoint,
            error_type=type(exc).__name__,
            error_details=str(exc),
        )
        raise ApiError(ErrorKind.HTTP, MALFORMED_RESPONSE, endpoint=endpoint) from exc
