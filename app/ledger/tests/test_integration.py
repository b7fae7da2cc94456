"""
End-to-end tests for the ledger.

These tests drive the public services the way the API layer does and
check the balance invariant (stored balance == credits - debits) after
every workflow, including concurrent postings from real threads.
"""

import uuid
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from django.db import connection

from accounts.services import AccountService
from ledger.exceptions import InsufficientFunds
from ledger.models import Posting, PostingKind
from ledger.queries import ledger_queries
from ledger.services import ledger
from ledger.types import TransactionFilters


class TestPostingWorkflow:
    """Open an account, move money, read it back."""

    def test_full_lifecycle(self, db):
        owner_id = uuid.uuid4()
        account = AccountService.open_account(owner_id)
        AccountService.get_account_for_owner(account.id, owner_id)

        ledger.credit(account.id, Decimal("100"), "Deposit")
        ledger.debit(account.id, Decimal("40"), "Groceries")
        ledger.credit(account.id, "10.5")

        summary = ledger_queries.account_summary(account.id)
        assert summary.balance == Decimal("70.5")
        assert summary.total_credits == Decimal("110.5")
        assert summary.total_debits == Decimal("40")

        history = ledger_queries.balance_history(account.id)
        assert history[-1].running_balance == summary.balance

        page = ledger_queries.list_transactions(
            TransactionFilters(account_id=account.id, kind=PostingKind.CREDIT)
        )
        assert page.total == 2

        assert ledger_queries.check_balance(account.id).is_consistent

    def test_summary_refreshes_after_posting(self, db):
        account = AccountService.open_account(uuid.uuid4())
        ledger.credit(account.id, 100)
        assert ledger_queries.account_summary(account.id).balance == Decimal("100")

        ledger.debit(account.id, 30)

        assert ledger_queries.account_summary(account.id).balance == Decimal("70")

    def test_rejected_debit_leaves_summary_cached(self, db):
        account = AccountService.open_account(uuid.uuid4())
        ledger.credit(account.id, 10)
        before = ledger_queries.account_summary(account.id)

        with pytest.raises(InsufficientFunds):
            ledger.debit(account.id, 11)

        assert ledger_queries.summary_cache.get(account.id) == before
        assert ledger_queries.check_balance(account.id).is_consistent


@pytest.mark.django_db(transaction=True)
class TestConcurrentPostings:
    """Postings from many threads against one account serialise correctly."""

    def _post(self, account_id, kind, amount):
        try:
            return ledger.post(account_id, kind, amount)
        finally:
            connection.close()

    def test_balance_matches_sum_of_postings(self):
        account = AccountService.open_account(uuid.uuid4())
        ledger.credit(account.id, Decimal("100"))

        jobs = [(PostingKind.CREDIT, Decimal("10.25"))] * 20 + [
            (PostingKind.DEBIT, Decimal("1.5"))
        ] * 20

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [
                pool.submit(self._post, account.id, kind, amount)
                for kind, amount in jobs
            ]
            results = [f.result() for f in futures]

        account.refresh_from_db()
        expected = Decimal("100") + 20 * Decimal("10.25") - 20 * Decimal("1.5")
        assert account.balance == expected
        assert len(results) == 40
        assert Posting.objects.filter(account=account).count() == 41
        assert ledger_queries.check_balance(account.id).is_consistent

        history = ledger_queries.balance_history(account.id)
        assert history[-1].running_balance == expected

    def test_concurrent_debits_never_overdraw(self):
        account = AccountService.open_account(uuid.uuid4())
        ledger.credit(account.id, Decimal("50"))

        def attempt(_):
            try:
                self._post(account.id, PostingKind.DEBIT, Decimal("10"))
                return True
            except InsufficientFunds:
                return False

        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(attempt, range(8)))

        account.refresh_from_db()
        assert outcomes.count(True) == 5
        assert account.balance == Decimal("0")
        assert ledger_queries.check_balance(account.id).is_consistent
