from dataclasses import dataclass

from deepclean_cart.core.domain.booking.entities.service_booking import ServiceBooking
from deepclean_cart.core.domain.booking.value_objects.order_confirmation import OrderConfirmation
from deepclean_cart.core.domain.shared.error_kind import ErrorKind
from deepclean_cart.core.exceptions.api_error import ApiError


@dataclass(frozen=True)
class BookingFailure:
    service_id: str
    error: ApiError

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a checkout attempt.

    On partial failure ``created`` lists the bookings that exist server-side
    even though the order as a whole failed; ``rolled_back`` lists those that
    were cancelled again by the compensation step.
    """

    success: bool
    confirmation: OrderConfirmation | None = None
    created: tuple[ServiceBooking, ...] = ()
    failures: tuple[BookingFailure, ...] = ()
    rolled_back: tuple[str, ...] = ()
    message: str | None = None
    cart_cleared: bool = False

    @property
    def is_partial(self) -> bool:
        """True when some bookings exist server-side for an order that failed."""
        return not self.success and len(self.created) > len(self.rolled_back)
