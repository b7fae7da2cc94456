"""
Account lookup exceptions.

Exception Hierarchy:
    NotFoundError (core)
    └── AccountNotFound - Account missing, malformed id, or not owned by caller
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import NotFoundError

if TYPE_CHECKING:
    import uuid
    from typing import Any


class AccountNotFound(NotFoundError):
    """
    Raised when an account cannot be found.

    Ownership mismatches raise the same error so callers cannot probe for
    the existence of accounts that belong to somebody else.

    Example:
        raise AccountNotFound(account_id)
    """

    default_error_code: str = "ACCOUNT_NOT_FOUND"

    def __init__(
        self,
        account_id: uuid.UUID | str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.account_id = account_id
        full_details = {"account_id": str(account_id)}
        if details:
            full_details.update(details)
        super().__init__(
            message=f"Account {account_id} not found",
            error_code=error_code,
            details=full_details,
        )
