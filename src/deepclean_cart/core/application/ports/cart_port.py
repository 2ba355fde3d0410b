from abc import ABC, abstractmethod
from typing import Any

from deepclean_cart.core.domain.cart import CartItem, CartSummary


class CartPort(ABC):
    """Remote cart CRUD. Implementations raise ApiError on any failure."""

    @abstractmethod
    async def get_cart_items(self) -> list[CartItem]:
        pass

    @abstractmethod
    async def get_cart_summary(self) -> CartSummary:
        pass

    @abstractmethod
    async def add_to_cart(
        self,
        service_id: str,
        quantity: int = 1,
        user_inputs: dict[str, Any] | None = None,
        calculated_price: float | None = None,
    ) -> CartItem | None:
        pass

    @abstractmethod
    async def update_cart_item(
        self,
        item_id: str,
        quantity: int | None = None,
        user_inputs: dict[str, Any] | None = None,
    ) -> CartItem | None:
        pass

    @abstractmethod
    async def remove_from_cart(self, item_id: str) -> None:
        pass

    @abstractmethod
    async def clear_cart(self) -> None:
        pass
