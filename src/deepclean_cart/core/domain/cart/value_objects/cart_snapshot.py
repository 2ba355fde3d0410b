from dataclasses import dataclass, field
from typing import Any

from deepclean_cart.core.domain.cart.entities.cart_item import CartItem
from deepclean_cart.core.domain.cart.value_objects.cart_summary import CartSummary


@dataclass(frozen=True)
class CartSnapshot:
    """Items plus summary as last seen from the server; the unit stored in the cache."""

    items: tuple[CartItem, ...] = field(default_factory=tuple)
    summary: CartSummary = field(default_factory=CartSummary.empty)

    @classmethod
    def empty(cls) -> "CartSnapshot":
        return cls()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CartSnapshot":
        items = tuple(CartItem.from_payload(raw) for raw in payload.get("items") or [])
        return cls(items=items, summary=CartSummary.from_payload(payload.get("summary")))

    def to_payload(self) -> dict[str, Any]:
        return {
            "items": [item.to_payload() for item in self.items],
            "summary": self.summary.to_payload(),
        }
