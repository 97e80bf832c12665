"""
Cache consultivo (advisory) para leituras de clientes.

Nunca é fonte de verdade: o padrão é ``NullCache`` (sempre miss).  O
``MemoryCache`` é um mapa TTL de um único processo, perdido a cada deploy.
"""
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from app.config import get_settings


class Cache(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ...

    @abstractmethod
    def delete_prefix(self, prefix: str) -> None:
        ...


class NullCache(Cache):
    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        return None

    def delete_prefix(self, prefix: str) -> None:
        return None


class MemoryCache(Cache):
    def __init__(self, default_ttl_seconds: int = 300):
        self.default_ttl_seconds = default_ttl_seconds
        self._items: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            expires_at, value = item
            if time.monotonic() > expires_at:
                del self._items[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._items[key] = (time.monotonic() + ttl, value)

    def delete_prefix(self, prefix: str) -> None:
        with self._lock:
            for key in [k for k in self._items if k.startswith(prefix)]:
                del self._items[key]


_cache: Optional[Cache] = None


def get_cache() -> Cache:
    """Dependency do FastAPI: instância única escolhida por CACHE_BACKEND."""
    global _cache
    if _cache is None:
        settings = get_settings()
        if settings.cache_backend == "memory":
            _cache = MemoryCache(default_ttl_seconds=settings.cache_ttl_seconds)
        else:
            _cache = NullCache()
    return _cache
