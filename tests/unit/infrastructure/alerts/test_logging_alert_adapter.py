from deepclean_cart.infrastructure.alerts import LoggingAlertAdapter


def test_forwards_alerts_to_sink_in_order() -> None:
    shown: list[tuple[str, str]] = []
    alerts = LoggingAlertAdapter(sink=lambda title, message: shown.append((title, message)))

    alerts.show("Success", "Deep Clean added to cart!")
    alerts.show("Error", "Failed to add item to cart")

    assert shown == [("Success", "Deep Clean added to cart!"), ("Error", "Failed to add item to cart")]
    assert alerts.last == ("Error", "Failed to add item to cart")


def test_history_keeps_only_most_recent_alerts() -> None:
    alerts = LoggingAlertAdapter(history_limit=3)

    for n in range(5):
        alerts.show("Success", f"alert {n}")

    assert alerts.history == [("Success", "alert 2"), ("Success", "alert 3"), ("Success", "alert 4")]
    assert alerts.last == ("Success", "alert 4")
