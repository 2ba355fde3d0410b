from .file_cache_store import FileCacheStore
from .file_token_store import FileTokenStore
from .in_memory_cache_store import InMemoryCacheStore
from .in_memory_token_store import InMemoryTokenStore

__all__ = ["FileCacheStore", "FileTokenStore", "InMemoryCacheStore", "InMemoryTokenStore"]
