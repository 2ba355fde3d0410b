"""Logging setup for the cart client.

``build_container`` calls ``configure_logging`` once with values taken from
Settings. Modules get their logger from ``get_logger(component)`` so every
event carries the component that emitted it in its ``context`` block.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Literal

import structlog

from deepclean_cart.infrastructure.observability.logging.log_schema_processor import (
    log_schema_processor,
)

LogFormat = Literal["json", "console"]

_JSON_ENVIRONMENTS = frozenset({"staging", "production"})
# libraries that log every request line at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")

_configured = False


@dataclass(frozen=True)
class LoggingOptions:
    level: str = "INFO"
    log_format: LogFormat | None = None
    environment: str = "development"
    service_name: str = "deepclean-cart"

    @property
    def renders_json(self) -> bool:
        if self.log_format is not None:
            return self.log_format == "json"
        return self.environment.lower() in _JSON_ENVIRONMENTS


def configure_logging(options: LoggingOptions | None = None) -> bool:
    """Install the structlog pipeline and bridge stdlib logging into it.

    Returns False when logging was already configured; later options are ignored.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return False
    _configured = True

    options = options or LoggingOptions()
    processors = _pipeline(options)
    renderer = _renderer(options)

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _bridge_stdlib(processors, renderer, options.level)
    return True


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Logger whose events are tagged ``context.component=<component>``.

    Stays a lazy proxy until first use, so module-level loggers pick up the
    configuration installed later by ``configure_logging``.
    """
    return structlog.get_logger(context_component=component)


def _pipeline(options: LoggingOptions) -> list[Any]:
    def add_deployment(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", options.service_name)
        event_dict.setdefault("environment", options.environment)
        return event_dict

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_deployment,
        log_schema_processor,
    ]


def _renderer(options: LoggingOptions) -> Any:
    if options.renders_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _bridge_stdlib(processors: list[Any], renderer: Any, level: str) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *processors,
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
