from dataclasses import dataclass

from deepclean_cart.core.domain.booking.entities.service_booking import ServiceBooking
from deepclean_cart.core.domain.booking.value_objects.service_address import ServiceAddress


@dataclass(frozen=True)
class OrderLine:
    service_title: str
    calculated_price: float
    service_duration: str
    quantity: int = 1


@dataclass(frozen=True)
class OrderConfirmation:
    """Receipt shown after checkout.

    ``order_id`` is synthesized on the client and never matches a server id;
    use ``bookings`` to look anything up later.
    """

    order_id: str
    service_date: str
    service_time: str
    total_amount: float
    address: ServiceAddress
    lines: tuple[OrderLine, ...]
    bookings: tuple[ServiceBooking, ...]
