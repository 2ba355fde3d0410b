from deepclean_cart.core.domain.booking.entities.service_booking import ServiceBooking
from deepclean_cart.core.domain.booking.value_objects.booking_request import BookingRequest
from deepclean_cart.core.domain.booking.value_objects.booking_status import BookingStatus
from deepclean_cart.core.domain.booking.value_objects.booking_update import BookingUpdate
from deepclean_cart.core.domain.booking.value_objects.checkout_result import (
    BookingFailure,
    CheckoutResult,
)
from deepclean_cart.core.domain.booking.value_objects.order_confirmation import (
    OrderConfirmation,
    OrderLine,
)
from deepclean_cart.core.domain.booking.value_objects.service_address import ServiceAddress

__all__ = [
    "BookingFailure",
    "BookingRequest",
    "BookingStatus",
    "BookingUpdate",
    "CheckoutResult",
    "OrderConfirmation",
    "OrderLine",
    "ServiceAddress",
    "ServiceBooking",
]
