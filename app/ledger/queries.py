"""
Read side of the ledger: listing, summaries and balance history.

Nothing here takes the account lock or writes to the database. Reads may
see an account just before or just after a posting that is committing
concurrently; each individual query is read-committed.

Usage:
    from ledger.queries import ledger_queries
    from ledger.types import TransactionFilters

    page = ledger_queries.list_transactions(
        TransactionFilters(account_id=account.id, kind="credit", limit=50)
    )
    summary = ledger_queries.account_summary(account.id)
    for point in ledger_queries.iter_balance_history(account.id):
        print(point.created_at, point.running_balance)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db.models import Q, Sum

from accounts.exceptions import AccountNotFound
from accounts.models import Account
from core.helpers import parse_uuid

from .amounts import ZERO, to_decimal
from .cache import SummaryCache
from .models import Posting, PostingKind
from .types import (
    AccountSummary,
    BalanceCheck,
    BalanceHistoryPoint,
    TransactionFilters,
    TransactionPage,
)

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterator
    from decimal import Decimal

logger = logging.getLogger(__name__)

HISTORY_CHUNK_SIZE = 500


class LedgerQueryService:
    """
    Read-only queries over accounts and postings.

    Args:
        summary_cache: Cache consulted by account_summary()
            (default: Django's cache)
    """

    def __init__(self, summary_cache: SummaryCache | None = None) -> None:
        self.summary_cache = SummaryCache() if summary_cache is None else summary_cache

    def list_transactions(self, filters: TransactionFilters) -> TransactionPage:
        """
        List an account's postings, newest first.

        Args:
            filters: Account, optional kind and created_at bounds, page window

        Returns:
            TransactionPage whose total counts every matching posting,
            not just the ones on the page

        Example:
            page = ledger_queries.list_transactions(
                TransactionFilters(account_id=account.id, limit=10, offset=10)
            )
            page.total     # e.g. 42
            len(page.data) # 10
        """
        account_pk = parse_uuid(filters.account_id)
        if account_pk is None:
            return TransactionPage(limit=filters.limit, offset=filters.offset)

        queryset = Posting.objects.filter(account_id=account_pk)
        if filters.kind is not None:
            queryset = queryset.filter(kind=filters.kind)
        if filters.date_from is not None:
            queryset = queryset.filter(created_at__gte=filters.date_from)
        if filters.date_to is not None:
            queryset = queryset.filter(created_at__lte=filters.date_to)

        total = queryset.count()
        rows = list(
            queryset.order_by("-created_at", "-id")[
                filters.offset : filters.offset + filters.limit
            ]
        )
        return TransactionPage(
            data=rows,
            total=total,
            limit=filters.limit,
            offset=filters.offset,
        )

    def account_summary(self, account_id: uuid.UUID | str) -> AccountSummary:
        """
        Get balance, total credits and total debits for an account.

        A cached summary is returned as-is. Otherwise the stored balance
        and the posting totals are read in a single statement, so all three
        figures come from the same committed state, and the result is cached for
        LEDGER_SUMMARY_CACHE_TTL seconds.

        Raises:
            AccountNotFound: If the account does not exist (nothing is cached)
        """
        cached = self.summary_cache.get(account_id)
        if cached is not None:
            logger.debug(f"Summary cache hit for account {account_id}")
            return cached

        logger.debug(f"Summary cache miss for account {account_id}")
        _, balance, total_credits, total_debits = self._balance_and_totals(account_id)
        summary = AccountSummary(
            balance=balance,
            total_credits=total_credits,
            total_debits=total_debits,
        )
        self.summary_cache.set(account_id, summary)
        return summary

    def iter_balance_history(
        self, account_id: uuid.UUID | str
    ) -> Iterator[BalanceHistoryPoint]:
        """
        Yield the running balance after each posting, oldest first.

        Postings are streamed from the database in chunks; the running
        total starts at zero and is carried in exact decimal arithmetic.
        Unknown or malformed account ids yield nothing.
        """
        account_pk = parse_uuid(account_id)
        if account_pk is None:
            return

        running = ZERO
        postings = (
            Posting.objects.filter(account_id=account_pk)
            .order_by("created_at", "id")
            .iterator(chunk_size=HISTORY_CHUNK_SIZE)
        )
        for posting in postings:
            amount = to_decimal(posting.amount)
            kind = PostingKind(posting.kind)
            running += kind.signed(amount)
            yield BalanceHistoryPoint(
                transaction_id=posting.id,
                kind=kind,
                amount=amount,
                running_balance=running,
                created_at=posting.created_at,
            )

    def balance_history(self, account_id: uuid.UUID | str) -> list[BalanceHistoryPoint]:
        """Full running-balance history for an account as a list."""
        return list(self.iter_balance_history(account_id))

    def check_balance(self, account_id: uuid.UUID | str) -> BalanceCheck:
        """
        Compare an account's stored balance with the sum of its postings.

        Raises:
            AccountNotFound: If the account does not exist
        """
        pk, balance, total_credits, total_debits = self._balance_and_totals(
            account_id
        )
        check = BalanceCheck(
            account_id=pk,
            stored=balance,
            derived=total_credits - total_debits,
        )
        if not check.is_consistent:
            logger.error(
                f"Balance mismatch on account {pk}: "
                f"stored {check.stored}, postings sum to {check.derived}"
            )
        return check

    @staticmethod
    def _balance_and_totals(
        account_id: uuid.UUID | str,
    ) -> tuple[uuid.UUID, Decimal, Decimal, Decimal]:
        """
        Read the stored balance and the credit and debit totals together.

        One SELECT joins the account row to its postings, so all three
        values come from the same snapshot even under read committed.

        Raises:
            AccountNotFound: If the id is malformed or no such account exists
        """
        pk = parse_uuid(account_id)
        row = None
        if pk is not None:
            row = (
                Account.objects.filter(id=pk)
                .annotate(
                    total_credits=Sum(
                        "postings__amount",
                        filter=Q(postings__kind=PostingKind.CREDIT),
                    ),
                    total_debits=Sum(
                        "postings__amount",
                        filter=Q(postings__kind=PostingKind.DEBIT),
                    ),
                )
                .values("balance", "total_credits", "total_debits")
                .first()
            )
        if row is None:
            raise AccountNotFound(account_id)
        return (
            pk,
            to_decimal(row["balance"]),
            to_decimal(row["total_credits"]),
            to_decimal(row["total_debits"]),
        )


# Singleton instance for convenience
# Usage: from ledger.queries import ledger_queries
ledger_queries = LedgerQueryService()
