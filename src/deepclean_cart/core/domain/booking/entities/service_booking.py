from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ServiceBooking:
    """Booking record as returned by the server."""

    id: str
    service_id: str
    booking_date: str
    booking_time: str
    duration_minutes: int
    total_amount: float
    status: str = "scheduled"
    payment_status: str = "pending"
    customer_name: str = ""
    customer_email: str = ""
    service_address: str = ""
    user_id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ServiceBooking":
        return cls(
            id=str(payload["id"]),
            service_id=str(payload.get("service_id", "")),
            booking_date=payload.get("booking_date", ""),
            booking_time=payload.get("booking_time", ""),
            duration_minutes=int(payload.get("duration_minutes") or 0),
            total_amount=float(payload.get("total_amount") or 0),
            status=payload.get("status") or "scheduled",
            payment_status=payload.get("payment_status") or "pending",
            customer_name=payload.get("customer_name") or "",
            customer_email=payload.get("customer_email") or "",
            service_address=payload.get("service_address") or "",
            user_id=payload.get("user_id"),
            created_at=payload.get("created_at"),
        )
