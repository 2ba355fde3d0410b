from .logging_alert_adapter import LoggingAlertAdapter

__all__ = ["LoggingAlertAdapter"]
