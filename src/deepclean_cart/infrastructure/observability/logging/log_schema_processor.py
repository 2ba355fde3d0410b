"""Schema processor for structlog.

Reshapes the flat structlog event_dict into nested blocks so that HTTP,
cache and error details land in predictable places in the JSON output.
Fields are extracted with dict.pop(key, default) so absent keys never raise.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

from deepclean_cart.infrastructure.observability.redaction_service import redact_dict, redact_text


def _build_root_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "timestamp": event_dict.pop("timestamp", None),
        "level": event_dict.pop("level", "info"),
        "service": event_dict.pop("service", "deepclean-cart"),
        "environment": event_dict.pop("environment", "development"),
        "trace_id": event_dict.pop("trace_id", None),
        "span_id": event_dict.pop("span_id", None),
        "message": redact_text(str(event_dict.pop("event", ""))),
    }


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_processing(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """Outcome and HTTP call details; present when either was logged."""
    status = event_dict.pop("processing_status", None)
    method = event_dict.pop("http_method", None)
    if status is None and method is None:
        return None
    return {
        "status": status,
        "method": method,
        "endpoint": event_dict.pop("http_endpoint", None),
        "status_code": event_dict.pop("http_status", None),
        "duration_ms": _safe_float(event_dict.pop("duration_ms", None)),
        "attempt": event_dict.pop("attempt", None),
    }


def _build_error(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    error_kind = event_dict.pop("error_kind", None)
    error_type = event_dict.pop("error_type", None)
    if error_kind is None and error_type is None:
        return None
    details = event_dict.pop("error_details", None)
    return {
        "kind": error_kind,
        "type": error_type,
        "status_code": event_dict.pop("error_status", None),
        "details": redact_text(details) if isinstance(details, str) else details,
        "retryable": event_dict.pop("error_retryable", False),
    }


def _build_event_block(event_dict: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": event_dict.pop("event_type", None),
        "actor_id": event_dict.pop("actor_id", None),
    }


def _build_context(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    component = event_dict.pop("context_component", None)
    if component is None:
        return None
    return {
        "component": component,
        "operation": event_dict.pop("operation", None),
        "mutation_id": event_dict.pop("mutation_id", None),
    }


def _build_metadata(event_dict: dict[str, Any]) -> dict[str, Any] | None:
    """Cache block: key and age of the entry involved."""
    cache_key = event_dict.pop("cache_key", None)
    if cache_key is None:
        return None
    return {
        "cache_key": cache_key,
        "age_ms": _safe_float(event_dict.pop("age_ms", None)),
    }


def _inject_otel_ids(event_dict: dict[str, Any]) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")


def log_schema_processor(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    _inject_otel_ids(event_dict)
    result = _build_root_fields(event_dict)

    processing = _build_processing(event_dict)
    if processing is not None:
        result["processing"] = processing

    error = _build_error(event_dict)
    if error is not None:
        result["error"] = error

    result["event"] = _build_event_block(event_dict)

    context = _build_context(event_dict)
    if context is not None:
        result["context"] = context

    metadata = _build_metadata(event_dict)
    if metadata is not None:
        result["metadata"] = metadata

    if event_dict:
        result["extra"] = redact_dict(dict(event_dict))

    return result
