from abc import ABC, abstractmethod

from deepclean_cart.core.domain.catalog import Service, ServiceVariant


class CatalogPort(ABC):
    @abstractmethod
    async def list_services(self) -> list[Service]:
        pass

    @abstractmethod
    async def get_service(self, service_id: str) -> Service | None:
        pass

    @abstractmethod
    async def get_variants(self, service_id: str) -> list[ServiceVariant]:
        pass
