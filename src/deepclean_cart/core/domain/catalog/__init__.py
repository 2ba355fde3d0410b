from deepclean_cart.core.domain.catalog.entities.service import Service, ServiceVariant
from deepclean_cart.core.domain.catalog.value_objects.grouped_service import GroupedService
from deepclean_cart.core.domain.catalog.value_objects.pricing_type import PricingType

__all__ = ["GroupedService", "PricingType", "Service", "ServiceVariant"]
