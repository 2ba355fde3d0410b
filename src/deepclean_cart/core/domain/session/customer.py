from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Customer:
    """The signed-in user, as persisted alongside the bearer token."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Customer":
        return cls(
            id=str(payload["id"]),
            email=payload.get("email", ""),
            first_name=payload.get("first_name") or "",
            last_name=payload.get("last_name") or "",
            phone=payload.get("phone") or None,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
        }
