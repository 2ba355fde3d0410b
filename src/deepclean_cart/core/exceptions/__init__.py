from deepclean_cart.core.exceptions.api_error import ApiError
from deepclean_cart.core.exceptions.cart_client_error import CartClientError
from deepclean_cart.core.exceptions.configuration_error import ConfigurationError
from deepclean_cart.core.exceptions.validation_error import (
    MeasurementOutOfRangeError,
    ValidationError,
)

__all__ = [
    "ApiError",
    "CartClientError",
    "ConfigurationError",
    "MeasurementOutOfRangeError",
    "ValidationError",
]
