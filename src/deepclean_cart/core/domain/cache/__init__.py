from deepclean_cart.core.domain.cache.cached_blob import CachedBlob

__all__ = ["CachedBlob"]
