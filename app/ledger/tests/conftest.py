"""
Pytest fixtures for ledger tests.

Sections:
    - Account Fixtures: Empty and funded accounts
    - Service Fixtures: Ledger and query services, cache doubles
    - Posting Helpers: Postings with controlled timestamps
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from accounts.tests.factories import AccountFactory
from ledger.cache import SummaryCache
from ledger.locks import AccountLockRegistry
from ledger.models import Posting
from ledger.queries import LedgerQueryService
from ledger.services import LedgerService
from ledger.tests.factories import BASE_TIME, PostingFactory


# ==========================================================================
# Account Fixtures
# ==========================================================================


@pytest.fixture
def account(db):
    """Account with a zero balance and no postings."""
    return AccountFactory()


@pytest.fixture
def funded_account(db, ledger_service):
    """
    Account holding 200 through a single credit posting.

    Funded through the ledger so the balance invariant holds.
    """
    account = AccountFactory()
    ledger_service.credit(account.id, Decimal("200"), "Opening balance")
    account.refresh_from_db()
    return account


# ==========================================================================
# Service Fixtures
# ==========================================================================


@pytest.fixture
def lock_registry():
    """Private lock registry so tests never share mutexes."""
    return AccountLockRegistry()


@pytest.fixture
def ledger_service(lock_registry):
    """LedgerService over Django's cache with a private lock registry."""
    return LedgerService(locks=lock_registry, lock_timeout=1.0)


@pytest.fixture
def query_service():
    """LedgerQueryService over Django's cache."""
    return LedgerQueryService()


@pytest.fixture
def cache_backend():
    """Cache double that always misses and records calls."""
    backend = MagicMock()
    backend.get.return_value = None
    backend.delete.return_value = True
    return backend


@pytest.fixture
def mock_summary_cache(cache_backend):
    """SummaryCache over the recording double with a 30 second TTL."""
    return SummaryCache(backend=cache_backend, ttl=30)


# ==========================================================================
# Posting Helpers
# ==========================================================================


@pytest.fixture
def make_posting(db):
    """
    Create a posting at BASE_TIME + minutes.

    The balance is not updated; set it on the account when a test needs it.

    Example:
        make_posting(account, PostingKind.DEBIT, "40", minutes=1)
    """

    def _make(account, kind, amount, minutes=0):
        posting = PostingFactory(account=account, kind=kind, amount=Decimal(amount))
        created_at = BASE_TIME + timedelta(minutes=minutes)
        Posting.objects.filter(pk=posting.pk).update(created_at=created_at)
        posting.refresh_from_db()
        return posting

    return _make
