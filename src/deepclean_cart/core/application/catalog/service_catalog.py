from typing import Any

from deepclean_cart.core.application.cache.freshness_cache import (
    DEFAULT_FRESHNESS_WINDOW_MS,
    FreshnessCache,
)
from deepclean_cart.core.application.ports import CacheStorePort, CatalogPort
from deepclean_cart.core.domain.catalog import GroupedService, Service, ServiceVariant
from deepclean_cart.core.domain.catalog.grouping import group_by_base_title
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.observability.tracing_setup import trace_operation

logger = get_logger("service_catalog")

CATALOG_CACHE_KEY = "catalog:services"


class ServiceCatalog:
    """Cached, read-only view of the service catalog."""

    def __init__(
        self,
        catalog: CatalogPort,
        cache: CacheStorePort,
        freshness_window_ms: float = DEFAULT_FRESHNESS_WINDOW_MS,
    ) -> None:
        self._catalog = catalog
        self._cache = FreshnessCache(cache, CATALOG_CACHE_KEY, freshness_window_ms)

    @property
    def cache_key(self) -> str:
        return self._cache.key

    @trace_operation("catalog.list_services")
    async def list_services(self, force_refresh: bool = False) -> list[Service]:
        """Active services, served from cache inside the freshness window.

        When the fetch fails the last cached catalog is returned whatever its
        age, or an empty list if there is none.
        """
        if not force_refresh:
            cached = _decode(await self._cache.read_fresh())
            if cached is not None:
                return cached
        try:
            services = await self._catalog.list_services()
        except ApiError as exc:
            logger.error(
                "Catalog fetch failed",
                processing_status="ERROR",
                error_kind=exc.kind.value,
                error_details=exc.message,
            )
            return _decode(await self._cache.read_any()) or []
        await self._cache.write([service.to_payload() for service in services])
        logger.info("Catalog refreshed", service_count=len(services))
        return services

    async def get_service(self, service_id: str) -> Service | None:
        try:
            return await self._catalog.get_service(service_id)
        except ApiError as exc:
            logger.warning("Service lookup failed", service_id=service_id, error_details=exc.message)
            return None

    async def get_variants(self, service_id: str) -> list[ServiceVariant]:
        try:
            return await self._catalog.get_variants(service_id)
        except ApiError as exc:
            logger.warning("Variant lookup failed", service_id=service_id, error_details=exc.message)
            return []

    async def grouped_variants(self, force_refresh: bool = False) -> list[GroupedService]:
        """All active variants across the catalog, grouped by base title."""
        services = await self.list_services(force_refresh=force_refresh)
        variants = [
            variant
            for service in services
            if service.is_active
            for variant in service.variants
            if variant.is_active
        ]
        return group_by_base_title(variants)


def _decode(payload: Any) -> list[Service] | None:
    """Services from a cached payload; None when absent or unreadable."""
    if payload is None:
        return None
    try:
        return [Service.from_payload(raw) for raw in payload]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.warning("Unreadable catalog cache entry, ignoring", error_details=str(exc))
        return None
