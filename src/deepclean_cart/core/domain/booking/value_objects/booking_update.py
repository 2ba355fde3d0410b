import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from deepclean_cart.core.domain.booking.value_objects.booking_status import BookingStatus
from deepclean_cart.core.exceptions.validation_error import ValidationError

_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_SETTABLE_STATUSES = (BookingStatus.SCHEDULED, BookingStatus.COMPLETED)


@dataclass(frozen=True)
class BookingUpdate:
    """Partial update for ``PUT /service-bookings/{id}``; unset fields are left alone.

    Validated on construction with the same rules the server applies, so a
    bad reschedule never reaches the network. Cancelling goes through
    ``cancel_booking``, not a status update.
    """

    booking_date: str | None = None
    booking_time: str | None = None
    duration_minutes: int | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    service_address: str | None = None
    special_instructions: str | None = None
    status: BookingStatus | None = None

    def __post_init__(self) -> None:
        if self.booking_date is not None:
            try:
                date.fromisoformat(self.booking_date)
            except ValueError:
                raise ValidationError(
                    "Valid booking date is required", context={"booking_date": self.booking_date}
                ) from None
        if self.booking_time is not None and not _TIME_PATTERN.match(self.booking_time):
            raise ValidationError(
                "Valid booking time is required (HH:MM format)",
                context={"booking_time": self.booking_time},
            )
        if self.duration_minutes is not None and self.duration_minutes < 1:
            raise ValidationError("Duration must be a positive integer")
        if self.customer_name is not None and not self.customer_name.strip():
            raise ValidationError("Customer name cannot be empty")
        if self.customer_email is not None and not _EMAIL_PATTERN.match(self.customer_email):
            raise ValidationError("Valid email is required")
        if self.service_address is not None and not self.service_address.strip():
            raise ValidationError("Service address cannot be empty")
        if self.status is not None and self.status not in _SETTABLE_STATUSES:
            raise ValidationError("Invalid status", context={"status": str(self.status)})

    @property
    def is_empty(self) -> bool:
        return not self.to_payload()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if value is None:
                continue
            payload[name] = value.value if isinstance(value, BookingStatus) else value
        return payload
