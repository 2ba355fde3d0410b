import random
import re
from datetime import date, time

import pytest

from deepclean_cart.core.application.checkout.booking_request_builder import (
    build_booking_request,
    format_booking_time,
    parse_duration_minutes,
)
from deepclean_cart.core.application.checkout.order_id import new_order_id
from deepclean_cart.core.domain.booking import ServiceAddress
from deepclean_cart.core.domain.cart import CartItem


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        ("2-3 hours", 120),
        ("4 hours", 240),
        ("1", 60),
        ("", 120),
        (None, 120),
        ("about an hour", 120),
        ("0 hours", 120),
    ],
)
def test_parse_duration_minutes(duration, expected) -> None:
    assert parse_duration_minutes(duration) == expected


def test_format_booking_time_drops_seconds() -> None:
    assert format_booking_time(time(14, 5, 59)) == "14:05"
    assert format_booking_time("14:05:59") == "14:05"


def test_measured_item_books_calculated_price(customer) -> None:
    item = CartItem(
        id="item-1",
        user_id="user-1",
        service_id="svc-carpet",
        service_title="Carpet Cleaning",
        service_price=0.0,
        calculated_price=45.0,
        service_duration="3 hours",
    )
    address = ServiceAddress("Calle Mayor 1", "Madrid", "28013")

    request = build_booking_request(
        item, customer, address, date(2026, 11, 2), time(9, 0), special_instructions="Pets at home"
    )

    assert request.total_amount == 45.0
    assert request.duration_minutes == 180
    assert request.special_instructions == "Pets at home"
    assert request.service_address == "Calle Mayor 1, Madrid, 28013, "


def test_order_id_shape() -> None:
    order_id = new_order_id(clock=lambda: 1_700_000_000.5, rng=random.Random(1))

    assert re.fullmatch(r"ORDER_1700000000500_[0-9a-z]{9}", order_id)
