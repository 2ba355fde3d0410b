"""Cart-to-bookings checkout.

One booking is created per cart item, all concurrently. Bookings are
independent server-side records: if any of them fails the order fails, the
cart is kept, and the bookings that did succeed stay in place unless
``rollback_on_failure`` is enabled, in which case they are cancelled again.
"""

import asyncio
import random
import time
from collections.abc import Callable
from datetime import date
from datetime import time as time_of_day

from structlog.contextvars import bind_contextvars

from deepclean_cart.core.application.cart.cart_orchestrator import CartOrchestrator, user_message
from deepclean_cart.core.application.checkout.booking_request_builder import (
    build_booking_request,
    format_booking_date,
    format_booking_time,
)
from deepclean_cart.core.application.checkout.order_id import new_order_id
from deepclean_cart.core.application.exceptions import (
    AuthenticationRequiredError,
    CheckoutValidationError,
)
from deepclean_cart.core.application.ports import AlertPort, BookingPort
from deepclean_cart.core.domain.booking import (
    BookingFailure,
    BookingRequest,
    CheckoutResult,
    OrderConfirmation,
    OrderLine,
    ServiceAddress,
    ServiceBooking,
)
from deepclean_cart.core.domain.cart import CartItem
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.observability.metrics_service import CHECKOUT_BOOKINGS_TOTAL
from deepclean_cart.infrastructure.observability.tracing_setup import trace_operation

logger = get_logger("checkout_orchestrator")


class CheckoutOrchestrator:
    def __init__(
        self,
        cart: CartOrchestrator,
        bookings: BookingPort,
        alerts: AlertPort,
        rollback_on_failure: bool = False,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._cart = cart
        self._bookings = bookings
        self._alerts = alerts
        self._rollback_on_failure = rollback_on_failure
        self._clock = clock
        self._rng = rng

    @trace_operation("checkout.place_order")
    async def place_order(
        self,
        address: ServiceAddress,
        booking_date: date | str,
        booking_time: time_of_day | str,
        special_instructions: str | None = None,
    ) -> CheckoutResult:
        """Book every cart item and, on full success, clear the cart."""
        try:
            self._validate(address)
        except (AuthenticationRequiredError, CheckoutValidationError) as exc:
            self._alerts.show("Error", str(exc))
            return CheckoutResult(success=False, message=str(exc))

        customer = self._cart.customer
        items = list(self._cart.cart_items)
        order_total = self._cart.cart_summary.total_price
        bind_contextvars(event_type="checkout.place_order")
        logger.info("Checkout started", item_count=len(items), order_total=order_total)

        requests = [
            build_booking_request(item, customer, address, booking_date, booking_time, special_instructions)
            for item in items
        ]
        created, failures = await self._create_all(requests)

        if failures:
            return await self._handle_failure(created, failures)

        cleared = await self._cart.clear_cart(notify=False)
        confirmation = OrderConfirmation(
            order_id=new_order_id(self._clock, self._rng),
            service_date=format_booking_date(booking_date),
            service_time=format_booking_time(booking_time),
            total_amount=order_total,
            address=address,
            lines=tuple(_order_line(item, booking) for item, booking in zip(items, created)),
            bookings=tuple(created),
        )
        logger.info(
            "Checkout completed",
            processing_status="SUCCESS",
            order_id=confirmation.order_id,
            booking_count=len(created),
        )
        return CheckoutResult(
            success=True,
            confirmation=confirmation,
            created=tuple(created),
            cart_cleared=cleared,
        )

    # ── Steps ────────────────────────────────────────────────────────

    def _validate(self, address: ServiceAddress) -> None:
        if self._cart.customer is None:
            raise AuthenticationRequiredError("Please login to place an order")
        if not self._cart.cart_items:
            raise CheckoutValidationError("Your cart is empty")
        missing = address.missing_fields()
        if missing:
            raise CheckoutValidationError(
                f"Please enter your {missing[0]}", context={"missing_fields": missing}
            )

    async def _create_all(
        self, requests: list[BookingRequest]
    ) -> tuple[list[ServiceBooking], list[BookingFailure]]:
        """Fire every booking request and wait for all of them, successes and failures alike."""
        outcomes = await asyncio.gather(
            *(self._bookings.create_booking(request) for request in requests),
            return_exceptions=True,
        )
        created: list[ServiceBooking] = []
        failures: list[BookingFailure] = []
        for request, outcome in zip(requests, outcomes):
            if isinstance(outcome, ApiError):
                CHECKOUT_BOOKINGS_TOTAL.labels(outcome="failed").inc()
                logger.error(
                    "Booking creation failed",
                    service_id=request.service_id,
                    error_kind=outcome.kind.value,
                    error_details=outcome.message,
                )
                failures.append(BookingFailure(service_id=request.service_id, error=outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                CHECKOUT_BOOKINGS_TOTAL.labels(outcome="created").inc()
                created.append(outcome)
        return created, failures

    async def _handle_failure(
        self, created: list[ServiceBooking], failures: list[BookingFailure]
    ) -> CheckoutResult:
        rolled_back: tuple[str, ...] = ()
        if self._rollback_on_failure and created:
            rolled_back = await self._compensate(created)
        logger.error(
            "Checkout failed",
            processing_status="ERROR",
            created_count=len(created),
            failed_count=len(failures),
            rolled_back_count=len(rolled_back),
        )
        detail = user_message(failures[0].error, "Unknown error")
        message = f"Failed to create service bookings: {detail}"
        self._alerts.show("Error", message)
        return CheckoutResult(
            success=False,
            created=tuple(created),
            failures=tuple(failures),
            rolled_back=rolled_back,
            message=message,
        )

    async def _compensate(self, created: list[ServiceBooking]) -> tuple[str, ...]:
        """Cancel bookings that succeeded; returns the ids actually cancelled."""
        outcomes = await asyncio.gather(
            *(self._bookings.cancel_booking(booking.id) for booking in created),
            return_exceptions=True,
        )
        cancelled: list[str] = []
        for booking, outcome in zip(created, outcomes):
            if outcome is True:
                CHECKOUT_BOOKINGS_TOTAL.labels(outcome="rolled_back").inc()
                cancelled.append(booking.id)
            elif isinstance(outcome, ApiError) or outcome is False:
                logger.error(
                    "Compensating cancel failed; booking left in place",
                    booking_id=booking.id,
                    error_details=getattr(outcome, "message", None),
                )
            elif isinstance(outcome, BaseException):
                raise outcome
        return tuple(cancelled)


def _order_line(item: CartItem, booking: ServiceBooking) -> OrderLine:
    return OrderLine(
        service_title=item.service_title or "Service",
        calculated_price=booking.total_amount,
        service_duration=f"{booking.duration_minutes / 60:g} hours",
    )
