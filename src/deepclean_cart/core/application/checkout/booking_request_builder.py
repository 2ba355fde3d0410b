import re
from datetime import date, time

from deepclean_cart.core.domain.booking import BookingRequest, ServiceAddress
from deepclean_cart.core.domain.cart import CartItem
from deepclean_cart.core.domain.session import Customer

DEFAULT_DURATION_MINUTES = 120

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_duration_minutes(duration: str | None) -> int:
    """Leading hour count of strings like "2-3 hours", in minutes; 120 if absent or zero."""
    match = _LEADING_INT_RE.match((duration or "").split("-")[0])
    if not match:
        return DEFAULT_DURATION_MINUTES
    return int(match.group(1)) * 60 or DEFAULT_DURATION_MINUTES


def format_booking_date(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value


def format_booking_time(value: time | str) -> str:
    """``HH:MM``, dropping seconds."""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value[:5]


def build_booking_request(
    item: CartItem,
    customer: Customer,
    address: ServiceAddress,
    booking_date: date | str,
    booking_time: time | str,
    special_instructions: str | None = None,
) -> BookingRequest:
    return BookingRequest(
        service_id=item.service_id,
        booking_date=format_booking_date(booking_date),
        booking_time=format_booking_time(booking_time),
        duration_minutes=parse_duration_minutes(item.service_duration),
        customer_name=customer.full_name,
        customer_email=customer.email,
        customer_phone=customer.phone,
        service_address=address.as_line(),
        special_instructions=special_instructions or address.additional_notes,
        total_amount=item.unit_price,
    )
