from structlog.contextvars import clear_contextvars

from deepclean_cart.core.application.cart.cart_orchestrator import CART_CACHE_KEY, CartOrchestrator
from deepclean_cart.core.application.catalog.service_catalog import CATALOG_CACHE_KEY, ServiceCatalog
from deepclean_cart.core.application.ports import CacheStorePort, TokenStorePort
from deepclean_cart.core.domain.session import Customer
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger

logger = get_logger("session_manager")


class SessionManager:
    """Drives the cart through sign-in and sign-out.

    Authentication itself happens elsewhere; this receives an already
    authenticated customer and bearer token.
    """

    def __init__(
        self,
        tokens: TokenStorePort,
        cache: CacheStorePort,
        cart: CartOrchestrator,
        catalog: ServiceCatalog | None = None,
    ) -> None:
        self._tokens = tokens
        self._cache = cache
        self._cart = cart
        self._catalog = catalog

    @property
    def customer(self) -> Customer | None:
        return self._cart.customer

    async def restore(self) -> bool:
        """Resume a persisted session on app start. Returns True if one was found."""
        customer = await self._tokens.get_customer()
        token = await self._tokens.get_token()
        if customer is None or not token:
            logger.info("No persisted session")
            await self._tokens.clear()
            return False
        logger.info("Restoring persisted session")
        await self._activate(customer)
        return True

    async def sign_in(self, customer: Customer, token: str) -> None:
        await self._tokens.save(customer, token)
        await self._activate(customer)

    async def sign_out(self) -> None:
        await self._cart.on_auth_changed(None)
        await self._tokens.clear()
        await self._cache.invalidate([CART_CACHE_KEY, CATALOG_CACHE_KEY])
        clear_contextvars()
        logger.info("Signed out")

    async def _activate(self, customer: Customer) -> None:
        await self._cart.on_auth_changed(customer)
        if self._catalog is not None:
            await self._catalog.list_services()
