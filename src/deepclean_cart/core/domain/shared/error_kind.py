from enum import Enum


class ErrorKind(str, Enum):
    """Structural classification of client errors, matched instead of message text."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP = "http"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"

    @property
    def is_network(self) -> bool:
        return self in (ErrorKind.TRANSPORT, ErrorKind.TIMEOUT)

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        if status_code in (401, 403):
            return cls.UNAUTHORIZED
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code == 409:
            return cls.CONFLICT
        if status_code in (400, 422):
            return cls.VALIDATION
        return cls.HTTP
