"""
Ledger-specific exceptions for posting operations.

Exception Hierarchy:
    LedgerError (base)
    ├── InvalidAmount - Non-positive or unrepresentable amount (also ValidationError)
    ├── InvalidPostingKind - Kind is neither credit nor debit (also ValidationError)
    ├── InsufficientFunds - Debit exceeds the current balance
    ├── AccountBusy - Per-account lock not acquired in time (also ConflictError)
    └── ImmutablePosting - Attempt to modify or delete a stored posting

    AccountNotFound lives in accounts.exceptions and is re-exported here
    because post() raises it when the account vanishes under the lock.

Usage:
    from ledger.exceptions import InsufficientFunds

    try:
        ledger.debit(account_id, Decimal("80"))
    except InsufficientFunds as e:
        print(f"Need {e.required}, have {e.available}")

Note:
    None of these are retried inside the ledger. Database errors raised
    while posting are not wrapped; they reach the caller unchanged after
    the transaction has been rolled back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from accounts.exceptions import AccountNotFound
from core.exceptions import BaseApplicationError, ConflictError, ValidationError

if TYPE_CHECKING:
    import uuid
    from decimal import Decimal
    from typing import Any


class LedgerError(BaseApplicationError):
    """
    Base exception for all ledger operations.

    Example:
        try:
            ledger.post(account_id, PostingKind.DEBIT, amount)
        except LedgerError as e:
            logger.warning(f"Posting rejected: {e}")
            return e.to_dict()
    """

    default_error_code: str = "LEDGER_ERROR"


class InvalidAmount(LedgerError, ValidationError):
    """
    Raised when a posting amount cannot be accepted.

    Malformed, non-positive and oversized amounts are rejected before any
    lock is taken or any query is issued. A credit that would push the
    balance past the storage limit is rejected under the lock, and the
    transaction rolls back.

    Attributes:
        value: The rejected input, as supplied by the caller
    """

    default_error_code: str = "INVALID_AMOUNT"

    def __init__(
        self,
        value: Any,
        reason: str,
        error_code: str | None = None,
    ):
        self.value = value
        super().__init__(
            message=f"Invalid amount {value!r}: {reason}",
            error_code=error_code,
            details={"value": str(value), "reason": reason},
        )


class InvalidPostingKind(LedgerError, ValidationError):
    """Raised when the posting kind is not credit or debit."""

    default_error_code: str = "INVALID_POSTING_KIND"


class InsufficientFunds(LedgerError):
    """
    Raised when a debit exceeds the account's current balance.

    Attributes:
        account_id: The account that would have gone negative
        required: The debit amount
        available: The balance read under the account lock

    Example:
        if current_balance < amount:
            raise InsufficientFunds(
                account.id,
                required=amount,
                available=current_balance,
            )
    """

    default_error_code: str = "INSUFFICIENT_FUNDS"

    def __init__(
        self,
        account_id: uuid.UUID,
        required: Decimal,
        available: Decimal,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.account_id = account_id
        self.required = required
        self.available = available

        message = (
            f"Account {account_id} has insufficient funds: "
            f"required {required}, available {available}"
        )

        full_details = {
            "account_id": str(account_id),
            "required": str(required),
            "available": str(available),
        }
        if details:
            full_details.update(details)

        super().__init__(
            message=message,
            error_code=error_code,
            details=full_details,
        )


class AccountBusy(LedgerError, ConflictError):
    """
    Raised when the per-account lock cannot be acquired in time.

    Another posting against the same account held the lock for longer
    than LEDGER_LOCK_TIMEOUT. Nothing was written; the caller may retry.
    """

    default_error_code: str = "ACCOUNT_BUSY"

    def __init__(
        self,
        account_id: uuid.UUID | str,
        timeout: float | None,
        error_code: str | None = None,
    ):
        self.account_id = account_id
        self.timeout = timeout
        super().__init__(
            message=f"Account {account_id} is locked by another posting (waited {timeout}s)",
            error_code=error_code,
            details={"account_id": str(account_id), "timeout": timeout},
        )


class ImmutablePosting(LedgerError):
    """
    Raised when code tries to update or delete a stored posting.

    Postings are append-only; corrections are new postings.
    """

    default_error_code: str = "IMMUTABLE_POSTING"


__all__ = [
    "LedgerError",
    "AccountNotFound",
    "InvalidAmount",
    "InvalidPostingKind",
    "InsufficientFunds",
    "AccountBusy",
    "ImmutablePosting",
]
