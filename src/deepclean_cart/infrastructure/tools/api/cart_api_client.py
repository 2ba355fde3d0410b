from typing import Any

from deepclean_cart.core.application.ports import CartPort
from deepclean_cart.core.domain.cart import CartItem, CartSummary
from deepclean_cart.infrastructure.tools.api.api_http_client import ApiHttpClient
from deepclean_cart.infrastructure.tools.api.payload_guard import parsing_payload


class CartApiClient(CartPort):
    """REST adapter for ``/cart``."""

    base_path = "/cart"

    def __init__(self, http: ApiHttpClient) -> None:
        self._http = http

    async def get_cart_items(self) -> list[CartItem]:
        data = await self._http.get(f"{self.base_path}/items", endpoint="/cart/items")
        with parsing_payload("/cart/items"):
            return [CartItem.from_payload(row) for row in data or []]

    async def get_cart_summary(self) -> CartSummary:
        data = await self._http.get(f"{self.base_path}/summary", endpoint="/cart/summary")
        with parsing_payload("/cart/summary"):
            return CartSummary.from_payload(data or {})

    async def add_to_cart(
        self,
        service_id: str,
        quantity: int = 1,
        user_inputs: dict[str, Any] | None = None,
        calculated_price: float | None = None,
    ) -> CartItem | None:
        body: dict[str, Any] = {
            "service_id": service_id,
            "quantity": quantity,
            "user_inputs": user_inputs or {},
        }
        if calculated_price is not None:
            body["calculated_price"] = calculated_price
        data = await self._http.post(f"{self.base_path}/items", body, endpoint="/cart/items")
        with parsing_payload("/cart/items"):
            return CartItem.from_payload(data) if data else None

    async def update_cart_item(
        self,
        item_id: str,
        quantity: int | None = None,
        user_inputs: dict[str, Any] | None = None,
    ) -> CartItem | None:
        body: dict[str, Any] = {}
        if quantity is not None:
            body["quantity"] = quantity
        if user_inputs is not None:
            body["user_inputs"] = user_inputs
        data = await self._http.put(
            f"{self.base_path}/items/{item_id}", body, endpoint="/cart/items/{id}"
        )
        with parsing_payload("/cart/items/{id}"):
            return CartItem.from_payload(data) if data else None

    async def remove_from_cart(self, item_id: str) -> None:
        await self._http.delete(f"{self.base_path}/items/{item_id}", endpoint="/cart/items/{id}")

    async def clear_cart(self) -> None:
        await self._http.delete(f"{self.base_path}/clear", endpoint="/cart/clear")
