from __future__ import annotations

from deepclean_cart.core.exceptions.cart_client_error import CartClientError


class ValidationError(CartClientError):
    """Client-side precondition failure, detected before any network call."""


class MeasurementOutOfRangeError(ValidationError):
    """Raised when a per-unit measurement is non-positive or outside the variant bounds."""
