from abc import ABC, abstractmethod

from deepclean_cart.core.domain.booking import BookingRequest, BookingUpdate, ServiceBooking


class BookingPort(ABC):
    @abstractmethod
    async def create_booking(self, request: BookingRequest) -> ServiceBooking:
        pass

    @abstractmethod
    async def list_bookings(self) -> list[ServiceBooking]:
        pass

    @abstractmethod
    async def list_scheduled_bookings(self) -> list[ServiceBooking]:
        """Upcoming bookings, soonest first."""

    @abstractmethod
    async def list_completed_bookings(self) -> list[ServiceBooking]:
        """Past bookings, most recent first."""

    @abstractmethod
    async def get_booking(self, booking_id: str) -> ServiceBooking:
        pass

    @abstractmethod
    async def update_booking(self, booking_id: str, update: BookingUpdate) -> ServiceBooking:
        pass

    @abstractmethod
    async def cancel_booking(self, booking_id: str) -> bool:
        pass
