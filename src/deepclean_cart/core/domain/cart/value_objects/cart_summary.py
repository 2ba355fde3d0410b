from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CartSummary:
    """Server-computed cart totals. Authoritative after every mutation."""

    total_items: int = 0
    total_price: float = 0.0

    @classmethod
    def empty(cls) -> "CartSummary":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "CartSummary":
        if not payload:
            return cls.empty()
        total_items = payload.get("totalItems", payload.get("total_items", 0))
        total_price = payload.get("totalPrice", payload.get("total_price", 0))
        return cls(total_items=int(total_items or 0), total_price=float(total_price or 0))

    def to_payload(self) -> dict[str, Any]:
        return {"totalItems": self.total_items, "totalPrice": self.total_price}
