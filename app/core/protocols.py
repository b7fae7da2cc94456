"""
Protocol definitions for generic infrastructure services.

Available Protocols:
    CacheBackend: Cache operations interface

Any object with Django's cache surface satisfies CacheBackend, so the
ledger's summary cache can run on Redis (django-redis), the local-memory
cache, Django's DummyCache, or a test double without code changes.

Usage:
    from core.protocols import CacheBackend

    def cached_operation(cache: CacheBackend, key: str):
        value = cache.get(key)
        if value is None:
            value = expensive_computation()
            cache.set(key, value, timeout=30)
        return value
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class CacheBackend(Protocol):
    """
    Protocol for cache backends.

    Compatible with django.core.cache.cache and django_redis clients.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get value from cache.

        Args:
            key: Cache key
            default: Value to return if key not found

        Returns:
            Cached value or default
        """
        ...

    def set(self, key: str, value: Any, timeout: int | None = None) -> None:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Expiration time in seconds (None for no expiry)
        """
        ...

    def delete(self, key: str) -> bool:
        """
        Delete value from cache.

        Args:
            key: Cache key to delete

        Returns:
            True if key was deleted, False if it didn't exist
        """
        ...
