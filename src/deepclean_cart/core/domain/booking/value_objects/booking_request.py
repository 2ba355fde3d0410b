from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class BookingRequest:
    """Denormalized payload for ``POST /service-bookings``; one per cart item."""

    service_id: str
    booking_date: str
    booking_time: str
    duration_minutes: int
    customer_name: str
    customer_email: str
    service_address: str
    total_amount: float
    customer_phone: str | None = None
    special_instructions: str | None = None
    payment_method: str = "pending"

    def to_payload(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}
