from deepclean_cart.core.application.ports.alert_port import AlertPort
from deepclean_cart.core.application.ports.booking_port import BookingPort
from deepclean_cart.core.application.ports.cache_store_port import CacheStorePort
from deepclean_cart.core.application.ports.cart_port import CartPort
from deepclean_cart.core.application.ports.catalog_port import CatalogPort
from deepclean_cart.core.application.ports.token_store_port import TokenStorePort

__all__ = [
    "AlertPort",
    "BookingPort",
    "CacheStorePort",
    "CartPort",
    "CatalogPort",
    "TokenStorePort",
]
