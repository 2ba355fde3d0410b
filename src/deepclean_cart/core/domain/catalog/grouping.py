import re

from deepclean_cart.core.domain.catalog.entities.service import ServiceVariant
from deepclean_cart.core.domain.catalog.value_objects.grouped_service import GroupedService

_SUFFIX_PATTERNS = [
    re.compile(r"\s*-\s*(Small|Medium|Large|XL|XXL|Extra Large|Extra Small)$", re.IGNORECASE),
    re.compile(r"\s*-\s*(Basic|Standard|Premium|Deluxe|Luxury)$", re.IGNORECASE),
    re.compile(r"\s*-\s*(10|[1-9])\s*(Bed|Room|Person|Hour|Day|Week|Month)$", re.IGNORECASE),
    re.compile(r"\s*\(\s*(Small|Medium|Large|Basic|Standard|Premium)\s*\)$", re.IGNORECASE),
    re.compile(r"\s*-\s*(Single|Double|Twin|Queen|King|Full)$", re.IGNORECASE),
]


def extract_base_title(title: str) -> str:
    """Strip a trailing size, tier or count suffix from a variant title."""
    base = title
    for pattern in _SUFFIX_PATTERNS:
        base = pattern.sub("", base)
    return base.strip()


def group_by_base_title(variants: list[ServiceVariant]) -> list[GroupedService]:
    groups: dict[str, list[ServiceVariant]] = {}
    for variant in variants:
        groups.setdefault(extract_base_title(variant.title), []).append(variant)

    grouped: list[GroupedService] = []
    for base_title, options in groups.items():
        ordered = sorted(options, key=lambda v: v.price)
        first = ordered[0]
        slug = re.sub(r"\s+", "_", base_title.lower())
        grouped.append(
            GroupedService(
                id=f"grouped_{slug}",
                base_title=base_title,
                description=first.description,
                category=first.category,
                duration=first.duration,
                options=tuple(ordered),
            )
        )
    return sorted(grouped, key=lambda g: g.base_title.lower())
