import asyncio
from collections import Counter
from typing import Any

import pytest

from deepclean_cart.core.application.ports import CartPort
from deepclean_cart.core.domain.cart import CartItem, CartSummary
from deepclean_cart.core.domain.catalog import ServiceVariant
from deepclean_cart.core.domain.catalog.value_objects.pricing_type import PricingType
from deepclean_cart.core.domain.session import Customer
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.alerts import LoggingAlertAdapter
from deepclean_cart.infrastructure.repositories import InMemoryCacheStore, InMemoryTokenStore


class FakeClock:
    """Epoch-milliseconds clock that only moves when told to."""

    def __init__(self, now_ms: float = 1_700_000_000_000.0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


class FakeCartServer(CartPort):
    """In-memory stand-in for the remote ``/cart`` API.

    ``fail_next[method_name]`` makes the next call to that method raise.
    """

    def __init__(self) -> None:
        self.items: dict[str, CartItem] = {}
        self.calls: Counter[str] = Counter()
        self.fail_next: dict[str, ApiError] = {}
        self._next_id = 1

    def seed(self, service_id: str, price: float, title: str | None = None) -> CartItem:
        item = CartItem(
            id=f"item-{self._next_id}",
            user_id="user-1",
            service_id=service_id,
            service_title=title or service_id,
            service_price=price,
            service_duration="2-3 hours",
        )
        self._next_id += 1
        self.items[item.id] = item
        return item

    def _maybe_fail(self, name: str) -> None:
        self.calls[name] += 1
        error = self.fail_next.pop(name, None)
        if error is not None:
            raise error

    async def get_cart_items(self) -> list[CartItem]:
        self._maybe_fail("get_cart_items")
        return list(self.items.values())

    async def get_cart_summary(self) -> CartSummary:
        self._maybe_fail("get_cart_summary")
        items = self.items.values()
        return CartSummary(
            total_items=sum(item.quantity for item in items),
            total_price=round(sum(item.unit_price * item.quantity for item in items), 2),
        )

    async def add_to_cart(
        self,
        service_id: str,
        quantity: int = 1,
        user_inputs: dict[str, Any] | None = None,
        calculated_price: float | None = None,
    ) -> CartItem | None:
        self._maybe_fail("add_to_cart")
        # yield so concurrent adds interleave like real requests
        await asyncio.sleep(0)
        item = self.seed(service_id, calculated_price or 0.0)
        item.user_inputs = dict(user_inputs or {})
        item.calculated_price = calculated_price
        return item

    async def update_cart_item(
        self,
        item_id: str,
        quantity: int | None = None,
        user_inputs: dict[str, Any] | None = None,
    ) -> CartItem | None:
        self._maybe_fail("update_cart_item")
        item = self.items[item_id]
        if quantity is not None:
            item.quantity = quantity
        return item

    async def remove_from_cart(self, item_id: str) -> None:
        self._maybe_fail("remove_from_cart")
        self.items.pop(item_id, None)

    async def clear_cart(self) -> None:
        self._maybe_fail("clear_cart")
        self.items.clear()

    @property
    def fetches(self) -> int:
        return self.calls["get_cart_items"]


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture()
def tokens() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture()
def alerts() -> LoggingAlertAdapter:
    return LoggingAlertAdapter()


@pytest.fixture()
def cart_server() -> FakeCartServer:
    return FakeCartServer()


@pytest.fixture()
def customer() -> Customer:
    return Customer(
        id="user-1",
        email="ana@example.com",
        first_name="Ana",
        last_name="Lopez",
        phone="+34 600 000 000",
    )


@pytest.fixture()
def make_variant():
    def _make(
        variant_id: str = "svc-deep",
        title: str = "Deep Clean",
        price: float = 150.0,
        **overrides: Any,
    ) -> ServiceVariant:
        return ServiceVariant(
            id=variant_id,
            service_id=overrides.pop("service_id", "parent-1"),
            title=title,
            price=price,
            duration=overrides.pop("duration", "2-3 hours"),
            **overrides,
        )

    return _make


@pytest.fixture()
def measured_variant() -> ServiceVariant:
    return ServiceVariant(
        id="svc-carpet",
        service_id="parent-2",
        title="Carpet Cleaning",
        price=0.0,
        pricing_type=PricingType.PER_UNIT,
        unit_price=4.5,
        unit_measure="m²",
        min_measurement=5,
        max_measurement=200,
    )
