from .api_http_client import ApiHttpClient
from .booking_api_client import BookingApiClient
from .cart_api_client import CartApiClient
from .catalog_api_client import CatalogApiClient

__all__ = ["ApiHttpClient", "BookingApiClient", "CartApiClient", "CatalogApiClient"]
