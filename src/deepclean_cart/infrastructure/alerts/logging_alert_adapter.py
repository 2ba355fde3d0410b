from collections import deque
from collections.abc import Callable

from deepclean_cart.core.application.ports import AlertPort
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger

logger = get_logger("alerts")

ALERT_HISTORY_LIMIT = 50


class LoggingAlertAdapter(AlertPort):
    """Logs each alert and forwards it to an optional UI callback.

    The most recent ``history_limit`` alerts are kept in display order.
    """

    def __init__(
        self,
        sink: Callable[[str, str], None] | None = None,
        history_limit: int = ALERT_HISTORY_LIMIT,
    ) -> None:
        self._sink = sink
        self._history: deque[tuple[str, str]] = deque(maxlen=history_limit)

    def show(self, title: str, message: str) -> None:
        self._history.append((title, message))
        logger.info("Alert shown", alert_title=title, alert_message=message)
        if self._sink is not None:
            self._sink(title, message)

    @property
    def history(self) -> list[tuple[str, str]]:
        return list(self._history)

    @property
    def last(self) -> tuple[str, str] | None:
        return self._history[-1] if self._history else None
