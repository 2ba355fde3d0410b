"""Wires the cart client from Settings.

``build_container()`` is the single entry point; everything it returns shares
one httpx client, one cache store and one token store.
"""

from dataclasses import dataclass

import httpx

from deepclean_cart.core.application.cart.cart_orchestrator import CartOrchestrator
from deepclean_cart.core.application.catalog.service_catalog import ServiceCatalog
from deepclean_cart.core.application.checkout.checkout_orchestrator import CheckoutOrchestrator
from deepclean_cart.core.application.ports import AlertPort, CacheStorePort, TokenStorePort
from deepclean_cart.core.application.session.session_manager import SessionManager
from deepclean_cart.infrastructure.alerts import LoggingAlertAdapter
from deepclean_cart.infrastructure.common.retry.retry_policy import RetryPolicy
from deepclean_cart.infrastructure.configuration import Settings
from deepclean_cart.infrastructure.observability import LoggingOptions, configure_logging, get_logger
from deepclean_cart.infrastructure.observability.tracing_setup import configure_tracing
from deepclean_cart.infrastructure.repositories import (
    FileCacheStore,
    FileTokenStore,
    InMemoryCacheStore,
    InMemoryTokenStore,
)
from deepclean_cart.infrastructure.tools.api import (
    ApiHttpClient,
    BookingApiClient,
    CartApiClient,
    CatalogApiClient,
)

logger = get_logger("container")


@dataclass
class CartClientContainer:
    settings: Settings
    http: ApiHttpClient
    cache: CacheStorePort
    tokens: TokenStorePort
    alerts: AlertPort
    cart: CartOrchestrator
    catalog: ServiceCatalog
    checkout: CheckoutOrchestrator
    session: SessionManager
    bookings: BookingApiClient

    async def aclose(self) -> None:
        await self.http.aclose()


def _build_cache(settings: Settings) -> CacheStorePort:
    if settings.cache_dir is not None:
        return FileCacheStore(settings.cache_dir)
    return InMemoryCacheStore()


def _build_tokens(settings: Settings) -> TokenStorePort:
    if settings.token_store_path is not None:
        return FileTokenStore(settings.token_store_path)
    return InMemoryTokenStore()


def build_container(
    settings: Settings | None = None,
    alerts: AlertPort | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> CartClientContainer:
    settings = settings or Settings()
    settings.validate_runtime()
    configure_logging(
        LoggingOptions(
            level=settings.log_level,
            log_format=settings.log_format,
            environment=settings.app_env.value,
        )
    )
    if settings.tracing_enabled:
        configure_tracing()

    cache = _build_cache(settings)
    tokens = _build_tokens(settings)
    alerts = alerts or LoggingAlertAdapter()
    retry = RetryPolicy(
        max_retries=settings.max_get_retries,
        base_delay=settings.retry_base_delay_seconds,
        max_delay=settings.retry_max_delay_seconds,
    )
    http = ApiHttpClient(
        settings.api_base_url,
        tokens,
        timeout=settings.request_timeout_seconds,
        retry_policy=retry,
        client=http_client,
    )

    bookings = BookingApiClient(http)
    cart = CartOrchestrator(
        CartApiClient(http),
        cache,
        alerts,
        freshness_window_ms=settings.cache_ttl_ms,
        optimistic_updates=settings.optimistic_updates,
    )
    catalog = ServiceCatalog(CatalogApiClient(http), cache, settings.cache_ttl_ms)
    checkout = CheckoutOrchestrator(
        cart,
        bookings,
        alerts,
        rollback_on_failure=settings.rollback_bookings_on_failure,
    )
    session = SessionManager(tokens, cache, cart, catalog)

    logger.info(
        "Cart client ready",
        environment=settings.app_env.value,
        api_base_url=settings.api_base_url,
        optimistic_updates=settings.optimistic_updates,
    )
    return CartClientContainer(
        settings=settings,
        http=http,
        cache=cache,
        tokens=tokens,
        alerts=alerts,
        cart=cart,
        catalog=catalog,
        checkout=checkout,
        session=session,
        bookings=bookings,
    )
