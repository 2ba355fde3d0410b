from dataclasses import dataclass, field
from typing import Any


def _to_float(value: Any, default: float | None = 0.0) -> float | None:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class CartItem:
    """A single service selection, with title/price/duration snapshotted at add time."""

    id: str
    user_id: str
    service_id: str
    service_title: str
    service_price: float
    quantity: int = 1
    service_duration: str = ""
    service_category: str = ""
    calculated_price: float | None = None
    user_inputs: dict[str, Any] = field(default_factory=dict)
    added_at: str | None = None
    updated_at: str | None = None
    service: dict[str, Any] | None = None

    @property
    def unit_price(self) -> float:
        """Measurement-based price when present, else the snapshotted service price."""
        return self.calculated_price or self.service_price

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CartItem":
        joined = payload.get("services") or payload.get("service")
        return cls(
            id=str(payload["id"]),
            user_id=str(payload.get("user_id", "")),
            service_id=str(payload["service_id"]),
            service_title=payload.get("service_title") or (joined or {}).get("title", ""),
            service_price=_to_float(payload.get("service_price")) or 0.0,
            quantity=int(payload.get("quantity") or 1),
            service_duration=payload.get("service_duration") or "",
            service_category=payload.get("service_category") or "",
            calculated_price=_to_float(payload.get("calculated_price"), default=None),
            user_inputs=dict(payload.get("user_inputs") or {}),
            added_at=payload.get("added_at"),
            updated_at=payload.get("updated_at"),
            service=dict(joined) if isinstance(joined, dict) else None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "user_id": self.user_id,
            "service_id": self.service_id,
            "service_title": self.service_title,
            "service_price": self.service_price,
            "quantity": self.quantity,
            "service_duration": self.service_duration,
            "service_category": self.service_category,
            "calculated_price": self.calculated_price,
            "user_inputs": dict(self.user_inputs),
            "added_at": self.added_at,
            "updated_at": self.updated_at,
        }
        if self.service is not None:
            payload["services"] = dict(self.service)
        return payload
