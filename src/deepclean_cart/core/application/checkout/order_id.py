import random
import string
import time
from collections.abc import Callable

_BASE36 = string.digits + string.ascii_lowercase


def new_order_id(
    clock: Callable[[], float] = time.time,
    rng: random.Random | None = None,
) -> str:
    """Receipt id of the form ``ORDER_<epoch-ms>_<9 base36 chars>``.

    Generated locally for the confirmation screen only; the server never sees it.
    """
    suffix = "".join((rng or random).choices(_BASE36, k=9))
    return f"ORDER_{int(clock() * 1000)}_{suffix}"
