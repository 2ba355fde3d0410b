from .container import CartClientContainer, build_container

__all__ = ["CartClientContainer", "build_container"]
