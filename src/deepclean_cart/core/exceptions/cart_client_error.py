from typing import Any


class CartClientError(Exception):
    """Base exception for every error raised by the cart client."""

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}
