import re
from typing import Any

REDACTED = "[REDACTED]"

# (prefix)(secret) pairs; only the secret group is replaced
SECRET_PATTERNS = [
    re.compile(r"(Bearer\s+)([A-Za-z0-9\-._~+/=]+)", re.IGNORECASE),
    re.compile(r"(apikey[\"']?\s*[:=]\s*[\"']?)([A-Za-z0-9\-._~+/=]+)", re.IGNORECASE),
    re.compile(r"(access_token=)([^&\s]+)", re.IGNORECASE),
]

SENSITIVE_KEYS = {
    "authorization",
    "apikey",
    "token",
    "password",
    "secret",
    "smtp_pass",
}


def redact_text(text: str) -> str:
    if not text:
        return text
    for pattern in SECRET_PATTERNS:
        text = pattern.sub(rf"\1{REDACTED}", text)
    return text


def redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return redact_dict(value)
    if isinstance(value, (list, tuple)):
        return [redact_value(item) for item in value]
    return value


def redact_dict(obj: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``obj`` with sensitive keys masked and bearer tokens scrubbed from strings."""
    return {
        key: REDACTED
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_KEYS)
        else redact_value(value)
        for key, value in obj.items()
    }


def token_preview(token: str | None) -> str:
    """First characters of a token for debug logs, never the whole value."""
    if not token:
        return "No token"
    return f"{token[:6]}..."
