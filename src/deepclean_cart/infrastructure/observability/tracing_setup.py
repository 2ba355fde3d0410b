"""OpenTelemetry tracing for orchestrator operations.

- configure_tracing(): one-shot TracerProvider setup
- get_tracer(): named Tracer
- trace_operation(): decorator that wraps a coroutine in a span
"""

from __future__ import annotations

import functools
import os
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

_CONFIGURED = False
_TRACER_NAME = "deepclean_cart"

P = ParamSpec("P")
R = TypeVar("R")


def configure_tracing(exporter: SpanExporter | None = None) -> None:
    """Install a TracerProvider once. Later calls are no-ops."""
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return
    _CONFIGURED = True

    resource = Resource.create(
        {
            "service.name": os.environ.get("SERVICE_NAME", "deepclean-cart"),
            "deployment.environment": os.environ.get("APP_ENV", "development"),
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(_TRACER_NAME)


def trace_operation(
    span_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Wrap an async operation in a span named ``span_name``.

    Exceptions are recorded on the span and re-raised unchanged.

    Usage:
        @trace_operation("cart.refresh")
        async def refresh(self, force_refresh=False): ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with get_tracer().start_as_current_span(span_name) as span:
                span.set_attribute("code.function", func.__qualname__)
                return await func(*args, **kwargs)

        return wrapper

    return decorator
