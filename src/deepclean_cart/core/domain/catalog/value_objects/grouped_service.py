from dataclasses import dataclass

from deepclean_cart.core.domain.catalog.entities.service import ServiceVariant


@dataclass(frozen=True)
class GroupedService:
    """Variants sharing a base title ("Bed Cleaning - Small" / "- Large"), cheapest first."""

    id: str
    base_title: str
    description: str
    category: str
    duration: str
    options: tuple[ServiceVariant, ...]

    @property
    def min_price(self) -> float:
        return self.options[0].price

    @property
    def max_price(self) -> float:
        return self.options[-1].price

    @property
    def price_range(self) -> str:
        if len(self.options) == 1:
            return f"€{self.min_price:.2f}"
        return f"€{self.min_price:.2f} - €{self.max_price:.2f}"
