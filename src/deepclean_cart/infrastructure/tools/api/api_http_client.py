"""Thin httpx wrapper shared by the cart, booking and catalog clients.

Adds the bearer token, unwraps the ``{success, data}`` envelope and turns
every failure into an ``ApiError``. Only GETs are retried.
"""

import time
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from deepclean_cart.core.application.ports import TokenStorePort
from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.common.retry.retry_policy import NO_RETRY, RetryPolicy
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.observability.metrics_service import (
    HTTP_REQUEST_SECONDS,
    HTTP_REQUESTS_TOTAL,
)
from deepclean_cart.infrastructure.observability.redaction_service import token_preview
from deepclean_cart.infrastructure.tools.api.dtos import ApiEnvelope, ErrorBody

logger = get_logger("api_http_client")


class ApiHttpClient:
    def __init__(
        self,
        base_url: str,
        tokens: TokenStorePort,
        timeout: float = 10.0,
        retry_policy: RetryPolicy = NO_RETRY,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._tokens = tokens
        self._retry = retry_policy
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(
        self, path: str, params: dict[str, Any] | None = None, *, endpoint: str | None = None
    ) -> Any:
        async def attempt() -> Any:
            return await self._request("GET", path, params=params, endpoint=endpoint)

        return await self._retry.run(attempt)

    async def post(self, path: str, json_data: dict[str, Any], *, endpoint: str | None = None) -> Any:
        return await self._request("POST", path, json_data=json_data, endpoint=endpoint)

    async def put(self, path: str, json_data: dict[str, Any], *, endpoint: str | None = None) -> Any:
        return await self._request("PUT", path, json_data=json_data, endpoint=endpoint)

    async def delete(self, path: str, *, endpoint: str | None = None) -> Any:
        return await self._request("DELETE", path, endpoint=endpoint)

    async def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        token = await self._tokens.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
            logger.debug("Attaching bearer token", bearer=token_preview(token))
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        endpoint: str | None = None,
    ) -> Any:
        """Issue one request and return the unwrapped ``data`` payload.

        ``endpoint`` is the path template used for metric labels so that ids
        never end up in label values.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        label = endpoint or path
        started = time.perf_counter()
        try:
            response = await self._client.request(
                method, url, headers=await self._headers(), params=params, json=json_data
            )
        except httpx.TimeoutException as exc:
            self._record(method, label, "timeout", started)
            raise ApiError(ErrorKind.TIMEOUT, "Request timed out", endpoint=label) from exc
        except httpx.TransportError as exc:
            self._record(method, label, "transport_error", started)
            raise ApiError(
                ErrorKind.TRANSPORT, str(exc) or "Network request failed", retryable=True, endpoint=label
            ) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "API response",
            http_method=method,
            http_endpoint=label,
            http_status=response.status_code,
            duration_ms=round(elapsed_ms, 1),
        )

        if response.is_error:
            self._record(method, label, "http_error", started)
            raise self._error_from(response, label)

        self._record(method, label, "ok", started)
        if response.status_code == 204 or not response.content:
            return {}
        return self._unwrap(response, label)

    @staticmethod
    def _record(method: str, endpoint: str, outcome: str, started: float) -> None:
        HTTP_REQUESTS_TOTAL.labels(method=method, endpoint=endpoint, outcome=outcome).inc()
        HTTP_REQUEST_SECONDS.labels(method=method, endpoint=endpoint).observe(
            time.perf_counter() - started
        )

    @staticmethod
    def _error_from(response: httpx.Response, endpoint: str) -> ApiError:
        fallback = f"HTTP error! status: {response.status_code}"
        try:
            message = ErrorBody.model_validate(response.json()).text(fallback)
        except (ValueError, PydanticValidationError):
            message = fallback
        status = response.status_code
        error = ApiError(
            ErrorKind.from_status(status),
            message,
            status_code=status,
            retryable=status >= 500,
            endpoint=endpoint,
        )
        logger.warning(
            "API request failed",
            http_endpoint=endpoint,
            error_kind=error.kind.value,
            error_status=status,
            error_details=message,
        )
        return error

    @staticmethod
    def _unwrap(response: httpx.Response, endpoint: str) -> Any:
        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError(
                ErrorKind.HTTP, "Malformed response body", status_code=response.status_code, endpoint=endpoint
            ) from exc
        if not isinstance(body, dict) or "success" not in body:
            return body
        envelope = ApiEnvelope.model_validate(body)
        if not envelope.success:
            raise ApiError(
                ErrorKind.HTTP,
                envelope.message or "Request failed",
                status_code=response.status_code,
                endpoint=endpoint,
            )
        return envelope.data if envelope.data is not None else {}
