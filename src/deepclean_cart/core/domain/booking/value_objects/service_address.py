from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceAddress:
    street_address: str
    city: str
    postal_code: str
    country: str = ""
    additional_notes: str | None = None

    def missing_fields(self) -> list[str]:
        """Required fields that are blank, in form order."""
        required = {
            "street address": self.street_address,
            "city": self.city,
            "postal code": self.postal_code,
        }
        return [label for label, value in required.items() if not (value or "").strip()]

    def as_line(self) -> str:
        return f"{self.street_address}, {self.city}, {self.postal_code}, {self.country}"
