from enum import Enum


class PricingType(str, Enum):
    FIXED = "fixed"
    PER_UNIT = "per_unit"

    @classmethod
    def parse(cls, value: str | None) -> "PricingType":
        """Unknown or missing pricing modes are treated as fixed."""
        try:
            return cls(value) if value else cls.FIXED
        except ValueError:
            return cls.FIXED
