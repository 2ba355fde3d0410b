from dataclasses import dataclass, field
from typing import Any

from deepclean_cart.core.domain.catalog.value_objects.pricing_type import PricingType


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class ServiceVariant:
    id: str
    service_id: str
    title: str
    price: float
    description: str = ""
    duration: str = ""
    features: tuple[str, ...] = ()
    pricing_type: PricingType = PricingType.FIXED
    unit_price: float | None = None
    unit_measure: str | None = None
    min_measurement: float | None = None
    max_measurement: float | None = None
    measurement_step: float | None = None
    display_order: int = 0
    is_active: bool = True
    category: str = ""

    @property
    def is_measured(self) -> bool:
        return self.pricing_type is PricingType.PER_UNIT and bool(self.unit_price)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ServiceVariant":
        parent = payload.get("services") or {}
        return cls(
            id=str(payload["id"]),
            service_id=str(payload.get("service_id", "")),
            title=payload.get("title", ""),
            price=float(payload.get("price") or 0),
            description=payload.get("description") or "",
            duration=payload.get("duration") or "",
            features=tuple(payload.get("features") or ()),
            pricing_type=PricingType.parse(payload.get("pricing_type")),
            unit_price=_optional_float(payload.get("unit_price")),
            unit_measure=payload.get("unit_measure"),
            min_measurement=_optional_float(payload.get("min_measurement")),
            max_measurement=_optional_float(payload.get("max_measurement")),
            measurement_step=_optional_float(payload.get("measurement_step")),
            display_order=int(payload.get("display_order") or 0),
            is_active=bool(payload.get("is_active", True)),
            category=payload.get("category") or parent.get("category", ""),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "service_id": self.service_id,
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "duration": self.duration,
            "features": list(self.features),
            "pricing_type": self.pricing_type.value,
            "unit_price": self.unit_price,
            "unit_measure": self.unit_measure,
            "min_measurement": self.min_measurement,
            "max_measurement": self.max_measurement,
            "measurement_step": self.measurement_step,
            "display_order": self.display_order,
            "is_active": self.is_active,
            "category": self.category,
        }


@dataclass(frozen=True)
class Service:
    """Catalog entry. Immutable from the client's point of view."""

    id: str
    title: str
    description: str = ""
    category: str = ""
    image_url: str | None = None
    pricing_type: PricingType = PricingType.FIXED
    unit_measure: str | None = None
    display_order: int = 0
    is_active: bool = True
    variants: tuple[ServiceVariant, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Service":
        return cls(
            id=str(payload["id"]),
            title=payload.get("title", ""),
            description=payload.get("description") or "",
            category=payload.get("category") or "",
            image_url=payload.get("image_url"),
            pricing_type=PricingType.parse(payload.get("pricing_type")),
            unit_measure=payload.get("unit_measure"),
            display_order=int(payload.get("display_order") or 0),
            is_active=bool(payload.get("is_active", True)),
            variants=tuple(
                ServiceVariant.from_payload(raw) for raw in payload.get("service_variants") or []
            ),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "image_url": self.image_url,
            "pricing_type": self.pricing_type.value,
            "unit_measure": self.unit_measure,
            "display_order": self.display_order,
            "is_active": self.is_active,
            "service_variants": [variant.to_payload() for variant in self.variants],
        }
