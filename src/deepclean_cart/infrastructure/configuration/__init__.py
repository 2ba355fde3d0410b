from .main_settings import AppEnvironment, Settings

__all__ = ["AppEnvironment", "Settings"]
