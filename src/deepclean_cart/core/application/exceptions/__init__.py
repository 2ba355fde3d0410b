from deepclean_cart.core.application.exceptions.cart_exceptions import (
    AuthenticationRequiredError,
    CheckoutValidationError,
    DuplicateCartItemError,
)

__all__ = [
    "AuthenticationRequiredError",
    "CheckoutValidationError",
    "DuplicateCartItemError",
]
