from __future__ import annotations

from deepclean_cart.core.exceptions.cart_client_error import CartClientError


class ConfigurationError(CartClientError):
    """Raised when configuration is invalid or incomplete."""
