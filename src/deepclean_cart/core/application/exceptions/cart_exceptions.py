"""Application-layer validation errors.

Raised before any network call so the orchestrators can short-circuit with a
specific alert instead of matching on server message text.
"""

from deepclean_cart.core.exceptions.validation_error import ValidationError


class AuthenticationRequiredError(ValidationError):
    """The operation needs a signed-in customer."""


class DuplicateCartItemError(ValidationError):
    """The service is already in the cart, or an add for it is still in flight."""


class CheckoutValidationError(ValidationError):
    """Checkout form or cart is incomplete (empty cart, missing address fields)."""
