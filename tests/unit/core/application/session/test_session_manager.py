"""Unit tests — SessionManager sign-in / restore / sign-out."""

from unittest.mock import AsyncMock

import pytest

from deepclean_cart.core.application.cart.cart_orchestrator import CART_CACHE_KEY, CartOrchestrator
from deepclean_cart.core.application.catalog.service_catalog import CATALOG_CACHE_KEY, ServiceCatalog
from deepclean_cart.core.application.session.session_manager import SessionManager
from deepclean_cart.core.domain.cart import CartState


@pytest.fixture()
def cart(cart_server, cache, alerts) -> CartOrchestrator:
    return CartOrchestrator(cart_server, cache, alerts)


@pytest.fixture()
def mock_catalog_port() -> AsyncMock:
    port = AsyncMock()
    port.list_services.return_value = []
    return port


@pytest.fixture()
def session(tokens, cache, cart, mock_catalog_port) -> SessionManager:
    return SessionManager(tokens, cache, cart, ServiceCatalog(mock_catalog_port, cache))


class TestSignIn:
    @pytest.mark.asyncio
    async def test_persists_token_and_loads_cart(
        self, session, tokens, cart, cart_server, customer, mock_catalog_port
    ) -> None:
        cart_server.seed("svc-deep", 150.0)

        await session.sign_in(customer, "jwt-abc")

        assert await tokens.get_token() == "jwt-abc"
        assert await tokens.get_customer() == customer
        assert cart.state is CartState.READY
        assert cart.is_service_in_cart("svc-deep")
        mock_catalog_port.list_services.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sign_in_after_sign_out_fetches_again(self, session, cart_server, customer) -> None:
        await session.sign_in(customer, "jwt-abc")
        await session.sign_out()
        await session.sign_in(customer, "jwt-abc")

        assert cart_server.fetches == 2

    @pytest.mark.asyncio
    async def test_restore_reuses_fresh_cart_cache(
        self, tokens, cache, cart_server, alerts, customer
    ) -> None:
        first = SessionManager(tokens, cache, CartOrchestrator(cart_server, cache, alerts))
        second = SessionManager(tokens, cache, CartOrchestrator(cart_server, cache, alerts))

        await first.sign_in(customer, "jwt-abc")
        await second.restore()

        assert cart_server.fetches == 1


class TestRestore:
    @pytest.mark.asyncio
    async def test_restores_persisted_session(self, session, tokens, cart, customer, cart_server) -> None:
        await tokens.save(customer, "jwt-abc")

        assert await session.restore() is True

        assert session.customer == customer
        assert cart_server.fetches == 1

    @pytest.mark.asyncio
    async def test_without_token_stays_signed_out(self, session, tokens, cart, customer) -> None:
        assert await session.restore() is False

        assert session.customer is None
        assert cart.state is CartState.UNINITIALIZED


class TestSignOut:
    @pytest.mark.asyncio
    async def test_clears_storage_cache_and_cart(
        self, session, tokens, cache, cart, cart_server, customer
    ) -> None:
        cart_server.seed("svc-deep", 150.0)
        await session.sign_in(customer, "jwt-abc")
        assert await cache.get(CART_CACHE_KEY) is not None
        assert await cache.get(CATALOG_CACHE_KEY) is not None

        await session.sign_out()

        assert await tokens.get_token() is None
        assert await tokens.get_customer() is None
        assert await cache.get(CART_CACHE_KEY) is None
        assert await cache.get(CATALOG_CACHE_KEY) is None
        assert cart.state is CartState.EMPTY
        assert cart.cart_items == ()
