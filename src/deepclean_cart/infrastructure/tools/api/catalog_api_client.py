from deepclean_cart.core.application.ports import CatalogPort
from deepclean_cart.core.domain.catalog import Service, ServiceVariant
from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError
from deepclean_cart.infrastructure.tools.api.api_http_client import ApiHttpClient
from deepclean_cart.infrastructure.tools.api.payload_guard import parsing_payload


class CatalogApiClient(CatalogPort):
    base_path = "/services"

    def __init__(self, http: ApiHttpClient) -> None:
        self._http = http

    async def list_services(self) -> list[Service]:
        data = await self._http.get(self.base_path, endpoint=self.base_path)
        with parsing_payload(self.base_path):
            return [Service.from_payload(row) for row in data or []]

    async def get_service(self, service_id: str) -> Service | None:
        try:
            data = await self._http.get(f"{self.base_path}/{service_id}", endpoint="/services/{id}")
        except ApiError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                return None
            raise
        with parsing_payload("/services/{id}"):
            return Service.from_payload(data) if data else None

    async def get_variants(self, service_id: str) -> list[ServiceVariant]:
        data = await self._http.get(
            f"{self.base_path}/{service_id}/variants", endpoint="/services/{id}/variants"
        )
        with parsing_payload("/services/{id}/variants"):
            return [ServiceVariant.from_payload(row) for row in data or []]
