from deepclean_cart.core.application.ports import BookingPort
from deepclean_cart.core.domain.booking import BookingRequest, BookingUpdate, ServiceBooking
from deepclean_cart.core.domain.shared import ErrorKind
from deepclean_cart.core.exceptions import ApiError, ValidationError
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger
from deepclean_cart.infrastructure.tools.api.api_http_client import ApiHttpClient
from deepclean_cart.infrastructure.tools.api.payload_guard import parsing_payload

logger = get_logger("booking_api_client")


class BookingApiClient(BookingPort):
    """REST adapter for ``/service-bookings``.

    An envelope with ``success=false`` is raised by the HTTP client as an
    ApiError carrying the server message; an empty ``data`` on create, get or
    update is treated the same way.
    """

    base_path = "/service-bookings"

    def __init__(self, http: ApiHttpClient) -> None:
        self._http = http

    @property
    def item_endpoint(self) -> str:
        return f"{self.base_path}/{{id}}"

    async def create_booking(self, request: BookingRequest) -> ServiceBooking:
        logger.info("Creating service booking", service_id=request.service_id)
        data = await self._http.post(self.base_path, request.to_payload(), endpoint=self.base_path)
        if not data:
            raise ApiError(ErrorKind.HTTP, "Failed to create booking", endpoint=self.base_path)
        with parsing_payload(self.base_path):
            booking = ServiceBooking.from_payload(data)
        logger.info("Service booking created", booking_id=booking.id, service_id=request.service_id)
        return booking

    async def list_bookings(self) -> list[ServiceBooking]:
        return await self._list(self.base_path)

    async def list_scheduled_bookings(self) -> list[ServiceBooking]:
        return await self._list(f"{self.base_path}/scheduled")

    async def list_completed_bookings(self) -> list[ServiceBooking]:
        return await self._list(f"{self.base_path}/completed")

    async def get_booking(self, booking_id: str) -> ServiceBooking:
        data = await self._http.get(f"{self.base_path}/{booking_id}", endpoint=self.item_endpoint)
        if not data:
            raise ApiError(
                ErrorKind.NOT_FOUND, "Booking not found", status_code=404, endpoint=self.item_endpoint
            )
        with parsing_payload(self.item_endpoint):
            return ServiceBooking.from_payload(data)

    async def update_booking(self, booking_id: str, update: BookingUpdate) -> ServiceBooking:
        if update.is_empty:
            raise ValidationError("Nothing to update", context={"booking_id": booking_id})
        logger.info("Updating service booking", booking_id=booking_id, fields=sorted(update.to_payload()))
        data = await self._http.put(
            f"{self.base_path}/{booking_id}", update.to_payload(), endpoint=self.item_endpoint
        )
        if not data:
            raise ApiError(ErrorKind.HTTP, "Failed to update booking", endpoint=self.item_endpoint)
        with parsing_payload(self.item_endpoint):
            return ServiceBooking.from_payload(data)

    async def cancel_booking(self, booking_id: str) -> bool:
        await self._http.delete(f"{self.base_path}/{booking_id}", endpoint=self.item_endpoint)
        logger.info("Service booking cancelled", booking_id=booking_id)
        return True

    async def _list(self, path: str) -> list[ServiceBooking]:
        data = await self._http.get(path, endpoint=path)
        with parsing_payload(path):
            return [ServiceBooking.from_payload(row) for row in data or []]
