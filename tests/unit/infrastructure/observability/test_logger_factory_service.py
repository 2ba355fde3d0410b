import pytest
from structlog.testing import capture_logs

from deepclean_cart.infrastructure.observability import LoggingOptions, get_logger


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        (LoggingOptions(), False),
        (LoggingOptions(environment="staging"), True),
        (LoggingOptions(environment="Production"), True),
        (LoggingOptions(environment="production", log_format="console"), False),
        (LoggingOptions(environment="development", log_format="json"), True),
    ],
)
def test_renderer_follows_format_then_environment(options, expected) -> None:
    assert options.renders_json is expected


def test_get_logger_tags_events_with_component() -> None:
    with capture_logs() as logs:
        get_logger("checkout_orchestrator").info("Checkout started", item_count=2)

    assert logs == [
        {
            "event": "Checkout started",
            "log_level": "info",
            "context_component": "checkout_orchestrator",
            "item_count": 2,
        }
    ]
