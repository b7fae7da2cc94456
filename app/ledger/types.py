"""
Data types for ledger operations.

Types:
    AccountSummary: Cached aggregate (balance, total credits, total debits)
    BalanceHistoryPoint: One step of the running-balance reconstruction
    TransactionFilters: Validated parameters for listing postings
    TransactionPage: One page of postings plus the unpaginated total
    BalanceCheck: Stored balance compared with the sum of postings

Usage:
    from ledger.types import TransactionFilters

    filters = TransactionFilters(account_id=account.id, kind="debit", limit=50)
    page = ledger_queries.list_transactions(filters)
    page.total  # count before pagination
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from django.conf import settings

from core.exceptions import ValidationError

from .models import PostingKind

if TYPE_CHECKING:
    from .models import Posting

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class AccountSummary:
    """
    Aggregate view of one account.

    Not authoritative - always re-derivable from the account row and its
    postings. Instances are stored verbatim in the summary cache.

    Attributes:
        balance: Stored current balance of the account
        total_credits: Sum of all credit amounts
        total_debits: Sum of all debit amounts
    """

    balance: Decimal
    total_credits: Decimal
    total_debits: Decimal


@dataclass(frozen=True)
class BalanceHistoryPoint:
    """
    Running balance immediately after one posting.

    Attributes:
        transaction_id: Id of the posting
        kind: credit or debit
        amount: Positive amount of the posting
        running_balance: Sum of signed amounts up to and including this posting
        created_at: When the posting was recorded
    """

    transaction_id: uuid.UUID
    kind: PostingKind
    amount: Decimal
    running_balance: Decimal
    created_at: datetime


@dataclass
class TransactionFilters:
    """
    Parameters for listing an account's postings.

    Required Attributes:
        account_id: Account whose postings are listed

    Optional Attributes:
        kind: Restrict to credits or debits
        date_from: Inclusive lower bound on created_at
        date_to: Inclusive upper bound on created_at
        limit: Page size (default LEDGER_DEFAULT_PAGE_SIZE, at most
            LEDGER_MAX_PAGE_SIZE)
        offset: Number of rows to skip (default 0)

    Raises:
        ValidationError: On construction, if any value is out of range
    """

    account_id: uuid.UUID | str
    kind: PostingKind | str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    limit: int | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate and normalise params after initialization."""
        if self.kind is not None:
            try:
                self.kind = PostingKind.coerce(self.kind)
            except ValueError:
                raise ValidationError(
                    f"Unknown posting kind {self.kind!r}",
                    error_code="INVALID_POSTING_KIND",
                    details={"kind": str(self.kind)},
                )

        if self.limit is None:
            self.limit = getattr(settings, "LEDGER_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)

        max_limit = getattr(settings, "LEDGER_MAX_PAGE_SIZE", MAX_PAGE_SIZE)
        if not 1 <= self.limit <= max_limit:
            raise ValidationError(
                f"limit must be between 1 and {max_limit}",
                error_code="INVALID_LIMIT",
                details={"limit": self.limit, "max_limit": max_limit},
            )
        if self.offset < 0:
            raise ValidationError(
                "offset must not be negative",
                error_code="INVALID_OFFSET",
                details={"offset": self.offset},
            )
        if (
            self.date_from is not None
            and self.date_to is not None
            and self.date_from > self.date_to
        ):
            raise ValidationError(
                "date_from must not be after date_to",
                error_code="INVALID_DATE_RANGE",
                details={
                    "date_from": self.date_from.isoformat(),
                    "date_to": self.date_to.isoformat(),
                },
            )


@dataclass
class TransactionPage:
    """
    One page of postings, newest first.

    Attributes:
        data: Postings on this page
        total: Number of postings matching the filters, ignoring pagination
        limit: Page size that was applied
        offset: Offset that was applied
    """

    data: list[Posting] = field(default_factory=list)
    total: int = 0
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @property
    def has_more(self) -> bool:
        """Whether postings exist beyond this page."""
        return self.offset + len(self.data) < self.total


@dataclass(frozen=True)
class BalanceCheck:
    """
    Result of reconciling an account's stored balance with its postings.

    Attributes:
        account_id: The account that was checked
        stored: Balance column on the account row
        derived: Sum of credit amounts minus sum of debit amounts
    """

    account_id: uuid.UUID
    stored: Decimal
    derived: Decimal

    @property
    def is_consistent(self) -> bool:
        """True when the stored balance matches the postings exactly."""
        return self.stored == self.derived

    @property
    def difference(self) -> Decimal:
        """Stored minus derived balance."""
        return self.stored - self.derived
