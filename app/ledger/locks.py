"""
Concurrency control for postings.

Two complementary mechanisms serialise postings against the same account:

1. **Row lock** (AccountService.lock_account)
   - SELECT ... FOR UPDATE inside the posting transaction
   - Serialises writers across processes and servers
   - Bounded on PostgreSQL with SET LOCAL lock_timeout (apply_lock_timeout)

2. **In-process account lock** (AccountLockRegistry)
   - One mutex per account id, created on demand and dropped when idle
   - Serialises threads of this process before they open a transaction,
     which is what keeps embedded stores (SQLite) consistent
   - Bounded wait; raises AccountBusy instead of blocking forever

Usage:

    from ledger.locks import account_locks

    with account_locks.hold(account_id, timeout=5.0):
        with transaction.atomic():
            apply_lock_timeout(5.0)
            account = AccountService.lock_account(account_id)
            ...

Note:
    Postings against different accounts never share a mutex or a row,
    so they proceed fully in parallel.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import connection

from .exceptions import AccountBusy

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterator

    from django.db import OperationalError

logger = logging.getLogger(__name__)

# SQLSTATE raised by PostgreSQL when lock_timeout expires
LOCK_NOT_AVAILABLE = "55P03"


class _LockEntry:
    """A mutex plus the number of threads currently holding or waiting on it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class AccountLockRegistry:
    """
    Registry of per-account mutexes with bounded acquisition.

    Entries are reference counted so the registry only holds mutexes for
    accounts that currently have a posting in flight.

    Example:
        registry = AccountLockRegistry()

        with registry.hold(account.id, timeout=2.0):
            post_under_lock()

        # Raises AccountBusy if another thread keeps the account for > 2s
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _LockEntry] = {}

    @contextmanager
    def hold(
        self,
        account_id: uuid.UUID | str,
        timeout: float | None = None,
    ) -> Iterator[None]:
        """
        Hold the mutex for one account for the duration of the block.

        Args:
            account_id: Account to lock
            timeout: Maximum wait in seconds; None waits indefinitely

        Raises:
            AccountBusy: If the mutex was not acquired within timeout
        """
        key = str(account_id)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _LockEntry()
            entry.users += 1

        acquired = entry.lock.acquire(timeout=-1 if timeout is None else timeout)
        try:
            if not acquired:
                logger.warning(
                    f"Timed out after {timeout}s waiting for account lock {key}"
                )
                raise AccountBusy(account_id, timeout)
            yield
        finally:
            if acquired:
                entry.lock.release()
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    self._entries.pop(key, None)

    def is_locked(self, account_id: uuid.UUID | str) -> bool:
        """Check whether some thread currently holds the account's mutex."""
        with self._guard:
            entry = self._entries.get(str(account_id))
        return entry is not None and entry.lock.locked()

    def __len__(self) -> int:
        """Number of accounts with a posting in flight or waiting."""
        with self._guard:
            return len(self._entries)


def apply_lock_timeout(timeout: float | None) -> None:
    """
    Bound the row-lock wait for the current transaction.

    Only PostgreSQL supports a per-transaction lock timeout; on other
    backends this is a no-op. Must run inside transaction.atomic().

    Args:
        timeout: Maximum wait in seconds; None leaves the server default
    """
    if timeout is None or connection.vendor != "postgresql":
        return
    milliseconds = max(int(timeout * 1000), 1)
    with connection.cursor() as cursor:
        cursor.execute(f"SET LOCAL lock_timeout = {milliseconds}")


def is_lock_timeout(exc: OperationalError) -> bool:
    """
    Check whether a database error is a lock wait timeout.

    Works with both psycopg (sqlstate) and psycopg2 (pgcode).
    """
    cause = exc.__cause__
    code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    return code == LOCK_NOT_AVAILABLE


# Process-wide registry used by the default LedgerService
account_locks = AccountLockRegistry()


__all__ = [
    "AccountLockRegistry",
    "account_locks",
    "apply_lock_timeout",
    "is_lock_timeout",
]
