from __future__ import annotations

from dataclasses import dataclass

from deepclean_cart.core.domain.shared.error_kind import ErrorKind


@dataclass(eq=False)
class ApiError(Exception):
    """Failure of a single REST call, classified by ``kind``.

    ``message`` is the server's envelope message when one was returned, so it
    can be shown to the user verbatim.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    retryable: bool = False
    endpoint: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        code = f" status={self.status_code}" if self.status_code is not None else ""
        return f"{self.kind.value}: {self.message}{code}"
