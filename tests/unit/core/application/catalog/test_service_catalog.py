"""Unit tests — ServiceCatalog cache policy and grouping."""

from unittest.mock import AsyncMock

import pytest

from deepclean_cart.core.application.catalog.service_catalog import ServiceCatalog
from deepclean_cart.core.domain.catalog import Service, ServiceVariant
from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError

WINDOW_MS = 300_000


def bed_cleaning() -> Service:
    return Service(
        id="svc-bed",
        title="Bed Cleaning",
        category="Upholstery",
        variants=(
            ServiceVariant(id="v-l", service_id="svc-bed", title="Bed Cleaning - Large", price=79.0),
            ServiceVariant(id="v-s", service_id="svc-bed", title="Bed Cleaning - Small", price=49.0),
            ServiceVariant(
                id="v-off", service_id="svc-bed", title="Bed Cleaning - Medium", price=59.0, is_active=False
            ),
        ),
    )


@pytest.fixture()
def mock_port() -> AsyncMock:
    port = AsyncMock()
    port.list_services.return_value = [bed_cleaning()]
    return port


@pytest.fixture()
def catalog(mock_port, cache) -> ServiceCatalog:
    return ServiceCatalog(mock_port, cache, WINDOW_MS)


class TestListServices:
    @pytest.mark.asyncio
    async def test_serves_from_cache_inside_window(self, catalog, mock_port, clock) -> None:
        first = await catalog.list_services()
        clock.advance(WINDOW_MS - 1)
        second = await catalog.list_services()

        assert first == second
        mock_port.list_services.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_force_refresh_bypasses_cache(self, catalog, mock_port) -> None:
        await catalog.list_services()
        await catalog.list_services(force_refresh=True)

        assert mock_port.list_services.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_returns_stale_copy(self, catalog, mock_port, clock) -> None:
        await catalog.list_services()
        clock.advance(WINDOW_MS * 10)
        mock_port.list_services.side_effect = ApiError(ErrorKind.TRANSPORT, "offline")

        services = await catalog.list_services()

        assert [service.id for service in services] == ["svc-bed"]

    @pytest.mark.asyncio
    async def test_failure_without_cache_returns_empty(self, catalog, mock_port) -> None:
        mock_port.list_services.side_effect = ApiError(ErrorKind.HTTP, "boom", status_code=500)

        assert await catalog.list_services() == []


class TestLookups:
    @pytest.mark.asyncio
    async def test_get_service_swallows_api_errors(self, catalog, mock_port) -> None:
        mock_port.get_service.side_effect = ApiError(ErrorKind.TIMEOUT, "slow")

        assert await catalog.get_service("svc-bed") is None

    @pytest.mark.asyncio
    async def test_get_variants_swallows_api_errors(self, catalog, mock_port) -> None:
        mock_port.get_variants.side_effect = ApiError(ErrorKind.NOT_FOUND, "missing", status_code=404)

        assert await catalog.get_variants("svc-bed") == []


class TestGroupedVariants:
    @pytest.mark.asyncio
    async def test_groups_active_variants_cheapest_first(self, catalog) -> None:
        [group] = await catalog.grouped_variants()

        assert group.base_title == "Bed Cleaning"
        assert [option.id for option in group.options] == ["v-s", "v-l"]
        assert group.price_range == "€49.00 - €79.00"
