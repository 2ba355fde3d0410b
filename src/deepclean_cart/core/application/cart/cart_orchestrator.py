"""Single point of mutation for the session's cart.

Mediates between the UI, the durable cache and the remote cart API. Every
public operation returns a plain result and reports failures through the
AlertPort; nothing here raises to the caller.
"""

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any

from structlog.contextvars import bind_contextvars

from deepclean_cart.core.application.cache.freshness_cache import (
    DEFAULT_FRESHNESS_WINDOW_MS,
    FreshnessCache,
)
from deepclean_cart.core.application.exceptions import (
    AuthenticationRequiredError,
    DuplicateCartItemError,
)
from deepclean_cart.core.application.ports import AlertPort, CacheStorePort, CartPort
from deepclean_cart.core.domain.cart import (
    CartItem,
    CartMutation,
    CartSnapshot,
    CartState,
    CartSummary,
    MutationType,
)
from deepclean_cart.core.domain.catalog import ServiceVariant
from deepclean_cart.core.domain.catalog.pricing import quote
from deepclean_cart.core.domain.session import Customer
from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError, MeasurementOutOfRangeError
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.observability.metrics_service import CART_MUTATIONS_TOTAL
from deepclean_cart.infrastructure.observability.tracing_setup import trace_operation

logger = get_logger("cart_orchestrator")

CART_CACHE_KEY = "cart:snapshot"
MUTATION_HISTORY_LIMIT = 100


class CartOrchestrator:
    """Reconciles remote cart state, the local cache and the in-memory mirror.

    Mutations are server-confirmed: the remote call runs first and a forced
    refresh reloads the authoritative items and totals. ``clear_cart`` is the
    exception and zeroes local state without a round trip. With
    ``optimistic_updates`` enabled, remove/update/clear are applied locally
    first and the previous snapshot is restored when the server rejects them.

    Calls are not serialized. ``loading`` is a UI hint, not a lock.
    """

    def __init__(
        self,
        cart: CartPort,
        cache: CacheStorePort,
        alerts: AlertPort,
        freshness_window_ms: float = DEFAULT_FRESHNESS_WINDOW_MS,
        optimistic_updates: bool = False,
    ) -> None:
        self._cart = cart
        self._cache = FreshnessCache(cache, CART_CACHE_KEY, freshness_window_ms)
        self._alerts = alerts
        self._optimistic = optimistic_updates
        self._customer: Customer | None = None
        self._items: list[CartItem] = []
        self._summary = CartSummary.empty()
        self._state = CartState.UNINITIALIZED
        self._resting_state = CartState.UNINITIALIZED
        self._in_flight = 0
        self._pending_service_ids: set[str] = set()
        self._mutations: deque[CartMutation] = deque(maxlen=MUTATION_HISTORY_LIMIT)
        # bumped on every sign-in/sign-out; a refresh started under an older
        # session must not publish its result
        self._session = 0

    # ── Read-only state ──────────────────────────────────────────────

    @property
    def cart_items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def cart_summary(self) -> CartSummary:
        return self._summary

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def customer(self) -> Customer | None:
        return self._customer

    @property
    def is_authenticated(self) -> bool:
        return self._customer is not None

    @property
    def mutations(self) -> tuple[CartMutation, ...]:
        return tuple(self._mutations)

    def is_service_in_cart(self, service_id: str) -> bool:
        """Pure lookup over the most recently loaded items."""
        return any(item.service_id == service_id for item in self._items)

    # ── Auth-gated lifecycle ─────────────────────────────────────────

    async def on_auth_changed(self, customer: Customer | None) -> None:
        """Load the cart for a signed-in customer, or reset it to EMPTY on sign-out."""
        self._session += 1
        self._mutations.clear()
        if customer is None:
            logger.info("Customer signed out, resetting cart")
            self._customer = None
            self._pending_service_ids.clear()
            self._apply(CartSnapshot.empty(), CartState.EMPTY)
            self._state = CartState.EMPTY
            return
        self._customer = customer
        bind_contextvars(actor_id=customer.id)
        logger.info("Customer signed in, loading cart")
        await self.refresh()

    # ── Refresh ──────────────────────────────────────────────────────

    @trace_operation("cart.refresh")
    async def refresh(self, force_refresh: bool = False) -> None:
        """Populate in-memory state from a fresh cache entry, else from the server.

        A failed fetch leaves the cart empty instead of raising.
        """
        if not self.is_authenticated:
            logger.info("Not authenticated, skipping cart refresh")
            return
        session = self._session
        async with self._busy():
            if not force_refresh:
                cached = await self._cached_snapshot()
                if self._session != session:
                    logger.info("Session changed during cart refresh, discarding result")
                    return
                if cached is not None:
                    self._apply(cached, CartState.READY)
                    logger.info("Cart loaded from cache", item_count=len(self._items))
                    return
            else:
                await self._cache.purge()
            try:
                snapshot = await self._fetch_remote()
            except ApiError as exc:
                if self._session != session:
                    return
                logger.error(
                    "Cart refresh failed, falling back to empty cart",
                    error_kind=exc.kind.value,
                    error_status=exc.status_code,
                    error_details=exc.message,
                    error_retryable=exc.retryable,
                )
                self._apply(CartSnapshot.empty(), CartState.EMPTY)
                return
            if self._session != session:
                logger.info("Session changed during cart refresh, discarding result")
                return
            self._apply(snapshot, CartState.READY)
            await self._cache.write(snapshot.to_payload())
            logger.info(
                "Cart refreshed from server",
                item_count=len(snapshot.items),
                total_price=snapshot.summary.total_price,
            )

    async def _cached_snapshot(self) -> CartSnapshot | None:
        cached = await self._cache.read_fresh()
        if cached is None:
            return None
        try:
            return CartSnapshot.from_payload(cached)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Unreadable cart cache entry, ignoring", error_details=str(exc))
            return None

    async def _fetch_remote(self) -> CartSnapshot:
        items, summary = await asyncio.gather(
            self._cart.get_cart_items(),
            self._cart.get_cart_summary(),
        )
        return CartSnapshot(items=tuple(items or ()), summary=summary or CartSummary.empty())

    # ── Mutations ────────────────────────────────────────────────────

    @trace_operation("cart.add")
    async def add_to_cart(
        self,
        service: ServiceVariant,
        calculated_price: float | None = None,
        user_inputs: dict[str, Any] | None = None,
    ) -> bool:
        """Add ``service`` once; duplicates and anonymous calls never reach the network."""
        try:
            self._check_can_add(service)
        except AuthenticationRequiredError:
            self._alerts.show("Error", "Please login to add items to cart")
            return False
        except DuplicateCartItemError:
            self._alerts.show("Already in Cart", f"{service.title} is already in your cart.")
            return False

        mutation = self._track(MutationType.ADD, service.id)
        self._pending_service_ids.add(service.id)
        try:
            async with self._busy():
                try:
                    await self._cart.add_to_cart(
                        service_id=service.id,
                        quantity=1,
                        user_inputs=user_inputs or {},
                        calculated_price=calculated_price or service.price,
                    )
                except ApiError as exc:
                    if exc.kind is ErrorKind.CONFLICT:
                        self._fail(mutation, exc, alert=False)
                        self._alerts.show("Already in Cart", f"{service.title} is already in your cart.")
                        await self.refresh(force_refresh=True)
                        return False
                    self._fail(mutation, exc, "Failed to add item to cart")
                    return False
                self._commit(mutation)
                await self.refresh(force_refresh=True)
        finally:
            self._pending_service_ids.discard(service.id)
        self._alerts.show("Success", f"{service.title} added to cart!")
        return True

    async def add_measured_service(self, variant: ServiceVariant, measurement: float) -> bool:
        """Quote a per-unit variant for ``measurement`` and add it with the quoted price."""
        if not self.is_authenticated:
            self._alerts.show("Login Required", "Please login to add items to your cart")
            return False
        try:
            price = quote(variant, measurement)
        except MeasurementOutOfRangeError as exc:
            self._alerts.show("Invalid Input", str(exc))
            return False
        user_inputs = {
            "measurement": measurement,
            "unit_measure": variant.unit_measure,
            "unit_price": variant.unit_price,
        }
        return await self.add_to_cart(variant, calculated_price=price, user_inputs=user_inputs)

    @trace_operation("cart.remove")
    async def remove_from_cart(self, item_id: str) -> bool:
        if not self.is_authenticated:
            return False
        mutation = self._track(MutationType.REMOVE, item_id)
        previous = self._snapshot()
        async with self._busy():
            if self._optimistic:
                self._apply_local([item for item in self._items if item.id != item_id])
            try:
                await self._cart.remove_from_cart(item_id)
            except ApiError as exc:
                self._restore(previous)
                self._fail(mutation, exc, "Failed to remove item from cart")
                return False
            self._commit(mutation)
            await self.refresh(force_refresh=True)
        return True

    @trace_operation("cart.update_quantity")
    async def update_quantity(self, item_id: str, quantity: int) -> bool:
        """Set an item's quantity; anything below 1 removes the item."""
        if not self.is_authenticated:
            return False
        if quantity < 1:
            return await self.remove_from_cart(item_id)
        mutation = self._track(MutationType.UPDATE_QUANTITY, item_id)
        previous = self._snapshot()
        async with self._busy():
            if self._optimistic:
                self._apply_local(
                    [_with_quantity(item, quantity) if item.id == item_id else item for item in self._items]
                )
            try:
                await self._cart.update_cart_item(item_id, quantity=quantity)
            except ApiError as exc:
                self._restore(previous)
                self._fail(mutation, exc, "Failed to update quantity")
                return False
            self._commit(mutation)
            await self.refresh(force_refresh=True)
        return True

    @trace_operation("cart.clear")
    async def clear_cart(self, notify: bool = True) -> bool:
        """Clear remotely, then zero local state and purge the cache without a refresh."""
        if not self.is_authenticated:
            return False
        mutation = self._track(MutationType.CLEAR)
        previous = self._snapshot()
        async with self._busy():
            if self._optimistic:
                self._apply_local([])
            try:
                await self._cart.clear_cart()
            except ApiError as exc:
                self._restore(previous)
                self._fail(mutation, exc, "Failed to clear cart")
                return False
            self._commit(mutation)
            self._apply(CartSnapshot.empty(), CartState.EMPTY)
            await self._cache.purge()
        if notify:
            self._alerts.show("Success", "Cart cleared successfully")
        return True

    # ── Internals ────────────────────────────────────────────────────

    def _check_can_add(self, service: ServiceVariant) -> None:
        if not self.is_authenticated:
            raise AuthenticationRequiredError("Not signed in", context={"service_id": service.id})
        if self.is_service_in_cart(service.id) or service.id in self._pending_service_ids:
            raise DuplicateCartItemError("Already in cart", context={"service_id": service.id})

    @asynccontextmanager
    async def _busy(self) -> AsyncIterator[None]:
        self._in_flight += 1
        self._state = CartState.LOADING
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._state = self._resting_state

    def _apply(self, snapshot: CartSnapshot, resting: CartState) -> None:
        self._items = list(snapshot.items)
        self._summary = snapshot.summary
        self._resting_state = resting

    def _apply_local(self, items: list[CartItem]) -> None:
        self._items = items
        self._summary = CartSummary(
            total_items=sum(item.quantity for item in items),
            total_price=round(sum(item.unit_price * item.quantity for item in items), 2),
        )

    def _snapshot(self) -> CartSnapshot:
        return CartSnapshot(items=tuple(self._items), summary=self._summary)

    def _restore(self, snapshot: CartSnapshot) -> None:
        if self._optimistic:
            self._items = list(snapshot.items)
            self._summary = snapshot.summary

    def _track(self, operation: MutationType, target_id: str | None = None) -> CartMutation:
        mutation = CartMutation(operation=operation, target_id=target_id)
        self._mutations.append(mutation)
        return mutation

    def _commit(self, mutation: CartMutation) -> None:
        mutation.commit()
        CART_MUTATIONS_TOTAL.labels(operation=mutation.operation.value, outcome="committed").inc()

    def _fail(
        self, mutation: CartMutation, exc: ApiError, generic_message: str = "", alert: bool = True
    ) -> None:
        mutation.roll_back(exc.message)
        CART_MUTATIONS_TOTAL.labels(operation=mutation.operation.value, outcome="rolled_back").inc()
        logger.error(
            "Cart mutation failed",
            operation=mutation.operation.value,
            mutation_id=mutation.id,
            target_id=mutation.target_id,
            error_kind=exc.kind.value,
            error_status=exc.status_code,
            error_details=exc.message,
        )
        if alert:
            self._alerts.show("Error", user_message(exc, generic_message))


def user_message(exc: ApiError, generic_message: str) -> str:
    """Transport failures get the generic text; server errors are shown verbatim."""
    if exc.kind.is_network or not exc.message:
        return generic_message
    return exc.message


def _with_quantity(item: CartItem, quantity: int) -> CartItem:
    return replace(item, quantity=quantity)
