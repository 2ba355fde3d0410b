"""Price quoting for fixed and per-unit (measured) catalog variants."""

from deepclean_cart.core.domain.catalog.entities.service import ServiceVariant
from deepclean_cart.core.domain.catalog.value_objects.pricing_type import PricingType
from deepclean_cart.core.exceptions.validation_error import MeasurementOutOfRangeError


def validate_measurement(variant: ServiceVariant, measurement: float) -> None:
    """Raise MeasurementOutOfRangeError if ``measurement`` is unusable for ``variant``."""
    unit = variant.unit_measure or ""
    context = {
        "variant_id": variant.id,
        "measurement": measurement,
        "min_measurement": variant.min_measurement,
        "max_measurement": variant.max_measurement,
    }
    if measurement is None or measurement <= 0:
        raise MeasurementOutOfRangeError("Please enter a valid measurement", context=context)
    if variant.min_measurement and measurement < variant.min_measurement:
        raise MeasurementOutOfRangeError(
            f"Minimum measurement is {variant.min_measurement:g} {unit}".rstrip(), context=context
        )
    if variant.max_measurement and measurement > variant.max_measurement:
        raise MeasurementOutOfRangeError(
            f"Maximum measurement is {variant.max_measurement:g} {unit}".rstrip(), context=context
        )


def quote(variant: ServiceVariant, measurement: float | None = None) -> float:
    """Return the price for ``variant``; per-unit variants need a valid ``measurement``."""
    if variant.pricing_type is not PricingType.PER_UNIT or not variant.unit_price:
        return variant.price
    validate_measurement(variant, measurement)  # type: ignore[arg-type]
    return round(measurement * variant.unit_price, 2)  # type: ignore[operator]
