from enum import Enum


class CartState(str, Enum):
    """Lifecycle of the in-memory cart mirror.

    UNINITIALIZED -> LOADING -> READY on sign-in, READY -> EMPTY on sign-out or
    clear, READY -> LOADING -> READY around every other mutation.
    There is no error state: failures degrade to EMPTY or leave the state unchanged.
    """

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
