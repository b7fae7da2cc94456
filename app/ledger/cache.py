"""
Time-boxed cache of account summaries.

The summary cache sits in front of LedgerQueryService.account_summary().
It is never the only copy of a value: on a miss (or after eviction) the
summary is recomputed from the account row and its postings.

Key format: "summary:<account_id>"
Timeout:    LEDGER_SUMMARY_CACHE_TTL seconds (default 30)

Usage:
    from ledger.cache import SummaryCache

    cache = SummaryCache()               # Django's default cache
    cache.set(account.id, summary)
    cache.get(account.id)                # AccountSummary or None
    cache.delete(account.id)             # after every posting
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings

from core.helpers import parse_uuid

from .types import AccountSummary

if TYPE_CHECKING:
    import uuid

    from core.protocols import CacheBackend

logger = logging.getLogger(__name__)

SUMMARY_KEY_PREFIX = "summary"
DEFAULT_SUMMARY_TTL = 30


class SummaryCache:
    """
    Summary cache over any CacheBackend.

    Args:
        backend: Object with get/set/delete; defaults to django.core.cache.cache
        ttl: Timeout in seconds; defaults to LEDGER_SUMMARY_CACHE_TTL

    Example:
        # Tests can inject a double or a throwaway backend
        cache = SummaryCache(backend=MagicMock(), ttl=5)
    """

    def __init__(
        self,
        backend: CacheBackend | None = None,
        ttl: int | None = None,
    ) -> None:
        self._backend = backend
        self._ttl = ttl

    @property
    def backend(self) -> CacheBackend:
        """Cache backend (resolved lazily so settings overrides apply)."""
        if self._backend is None:
            from django.core.cache import cache

            return cache
        return self._backend

    @property
    def ttl(self) -> int:
        """Timeout applied when storing summaries."""
        if self._ttl is None:
            return getattr(settings, "LEDGER_SUMMARY_CACHE_TTL", DEFAULT_SUMMARY_TTL)
        return self._ttl

    @staticmethod
    def key_for(account_id: uuid.UUID | str) -> str:
        """Build the cache key for an account (UUIDs in canonical form)."""
        pk = parse_uuid(account_id)
        return f"{SUMMARY_KEY_PREFIX}:{account_id if pk is None else pk}"

    def get(self, account_id: uuid.UUID | str) -> AccountSummary | None:
        """
        Return the cached summary, or None on a miss.

        Values that are not AccountSummary instances (for example left by
        an older deployment) count as a miss.
        """
        value = self.backend.get(self.key_for(account_id))
        if value is None:
            return None
        if not isinstance(value, AccountSummary):
            logger.debug(f"Ignoring unexpected cached value for account {account_id}")
            return None
        return value

    def set(
        self,
        account_id: uuid.UUID | str,
        summary: AccountSummary,
        ttl: int | None = None,
    ) -> None:
        """Store a summary for ttl seconds (default: the configured TTL)."""
        self.backend.set(
            self.key_for(account_id),
            summary,
            self.ttl if ttl is None else ttl,
        )

    def delete(self, account_id: uuid.UUID | str) -> bool:
        """
        Drop the whole cached summary for an account.

        Returns:
            True if an entry was removed
        """
        return bool(self.backend.delete(self.key_for(account_id)))


# Shared instance bound to Django's default cache
summary_cache = SummaryCache()
