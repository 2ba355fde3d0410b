from abc import ABC, abstractmethod


class AlertPort(ABC):
    """One-shot, user-facing notification (the mobile app's alert dialog)."""

    @abstractmethod
    def show(self, title: str, message: str) -> None:
        pass
