"""
Ledger engine: the only code path that changes an account balance.

Every posting runs the same protocol:

    1. Validate amount and kind (no lock, no query)
    2. Take the per-account lock (in-process mutex, then SELECT ... FOR UPDATE)
    3. Read the balance under the lock; reject overdrafts and balances
       too large to store
    4. Write the new balance and append the posting in one transaction
    5. After the transaction, evict the account's cached summary

Failures in steps 2-4 roll back the whole unit; neither the balance nor
the posting survives and the original error reaches the caller.

Usage:
    from ledger.services import LedgerService, ledger

    # Using the singleton
    posting = ledger.credit(account.id, Decimal("50.00"), "Salary")
    posting = ledger.debit(account.id, "12.5")

    # Or with injected collaborators (tests, scripts)
    service = LedgerService(summary_cache=SummaryCache(backend=fake), lock_timeout=1)
    service.post(account.id, PostingKind.CREDIT, 10)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import OperationalError, connection, transaction

from accounts.services import AccountService

from .amounts import amount_limit, parse_amount, to_decimal
from .cache import SummaryCache
from .exceptions import (
    AccountBusy,
    AccountNotFound,
    InsufficientFunds,
    InvalidAmount,
    InvalidPostingKind,
)
from .locks import (
    AccountLockRegistry,
    account_locks,
    apply_lock_timeout,
    is_lock_timeout,
)
from .models import Posting, PostingKind

if TYPE_CHECKING:
    import uuid
    from decimal import Decimal
    from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


class LedgerService:
    """
    Service class for posting credits and debits.

    Key features:
    - Balance update and posting insert commit or roll back together
    - Postings on the same account are serialised; other accounts never wait
    - Bounded lock wait (AccountBusy instead of blocking forever)
    - Summary cache eviction after every successful posting

    Args:
        summary_cache: Cache to evict after postings (default: Django's cache)
        locks: Registry of in-process account locks (default: shared registry)
        lock_timeout: Seconds to wait for an account lock
            (default: LEDGER_LOCK_TIMEOUT)
    """

    def __init__(
        self,
        summary_cache: SummaryCache | None = None,
        locks: AccountLockRegistry | None = None,
        lock_timeout: float | None = None,
    ) -> None:
        self.summary_cache = SummaryCache() if summary_cache is None else summary_cache
        self.locks = account_locks if locks is None else locks
        self._lock_timeout = lock_timeout

    @property
    def lock_timeout(self) -> float:
        if self._lock_timeout is None:
            return getattr(settings, "LEDGER_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT)
        return self._lock_timeout

    def post(
        self,
        account_id: uuid.UUID | str,
        kind: PostingKind | str,
        amount: Any,
        description: str | None = None,
    ) -> Posting:
        """
        Apply one credit or debit to an account.

        Args:
            account_id: Account to post against
            kind: PostingKind or its value ("credit" / "debit")
            amount: Positive amount (Decimal, int, numeric string or float)
            description: Optional free text stored with the posting

        Returns:
            The persisted Posting, with its id and created_at populated

        Raises:
            InvalidAmount: If amount is not a positive, representable number,
                or a credit would push the balance past what the store keeps
            InvalidPostingKind: If kind is neither credit nor debit
            AccountNotFound: If the account does not exist
            InsufficientFunds: If a debit exceeds the current balance
            AccountBusy: If the account lock was not acquired in time
            DatabaseError: Any store failure, after rollback

        Example:
            posting = ledger.post(account.id, PostingKind.DEBIT, Decimal("80"))
            posting.account.balance  # 120 when it was 200 before
        """
        amount = parse_amount(amount)
        try:
            kind = PostingKind.coerce(kind)
        except ValueError:
            raise InvalidPostingKind(
                f"Unknown posting kind {kind!r}",
                details={"kind": str(kind)},
            )

        timeout = self.lock_timeout
        with self.locks.hold(account_id, timeout=timeout):
            try:
                with transaction.atomic():
                    apply_lock_timeout(timeout)
                    posting = self._apply(account_id, kind, amount, description)
            except OperationalError as exc:
                if is_lock_timeout(exc):
                    logger.warning(
                        f"Row lock wait exceeded {timeout}s for account {account_id}"
                    )
                    raise AccountBusy(account_id, timeout) from exc
                raise

            self._evict_summary(posting.account_id)

        logger.info(
            f"Posted {kind.value} of {amount} to account {posting.account_id} "
            f"(posting {posting.id})"
        )
        return posting

    def credit(
        self,
        account_id: uuid.UUID | str,
        amount: Any,
        description: str | None = None,
    ) -> Posting:
        """Add money to an account. See post()."""
        return self.post(account_id, PostingKind.CREDIT, amount, description)

    def debit(
        self,
        account_id: uuid.UUID | str,
        amount: Any,
        description: str | None = None,
    ) -> Posting:
        """Take money out of an account; never below zero. See post()."""
        return self.post(account_id, PostingKind.DEBIT, amount, description)

    def _apply(
        self,
        account_id: uuid.UUID | str,
        kind: PostingKind,
        amount: Decimal,
        description: str | None,
    ) -> Posting:
        """
        Read, validate and write under the row lock.

        Must run inside transaction.atomic(); any exception raised here
        rolls back both writes.
        """
        account = AccountService.lock_account(account_id)
        if account is None:
            raise AccountNotFound(account_id)

        current_balance = to_decimal(account.balance)
        if kind == PostingKind.DEBIT and current_balance < amount:
            logger.warning(
                f"Rejected debit of {amount} from account {account.id}: "
                f"balance is {current_balance}"
            )
            raise InsufficientFunds(
                account.id,
                required=amount,
                available=current_balance,
            )

        new_balance = current_balance + kind.signed(amount)
        if new_balance >= amount_limit():
            logger.warning(
                f"Rejected {kind.value} of {amount} to account {account.id}: "
                "balance would exceed the storage limit"
            )
            raise InvalidAmount(amount, "resulting balance is too large to store")

        AccountService.update_balance(account, new_balance)
        return Posting.objects.create(
            account=account,
            kind=kind,
            amount=amount,
            description=description,
        )

    def _evict_summary(self, account_id: uuid.UUID) -> None:
        """
        Drop the cached summary for an account without failing the posting.

        When called inside an outer transaction the entry is evicted now
        and again once that transaction commits.
        """
        self._safe_delete(account_id)
        if connection.in_atomic_block:
            transaction.on_commit(lambda: self._safe_delete(account_id))

    def _safe_delete(self, account_id: uuid.UUID) -> None:
        try:
            self.summary_cache.delete(account_id)
        except Exception:
            logger.warning(
                f"Failed to evict summary cache for account {account_id}",
                exc_info=True,
            )


# Singleton instance for convenience
# Usage: from ledger.services import ledger
ledger = LedgerService()
