"""
Base exception classes for application-wide error handling.

Every domain error raised by the ledger core derives from
BaseApplicationError so callers (API layers, admin actions, scripts) can
translate failures into responses without knowing each concrete class.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Caller supplied an unusable value
    ├── NotFoundError - Resource lookup failed
    └── ConflictError - Operation conflicts with current state or a lock holder

Usage:
    from core.exceptions import NotFoundError, ValidationError

    raise ValidationError("limit must be positive", error_code="INVALID_LIMIT")

    try:
        ...
    except BaseApplicationError as e:
        payload = e.to_dict()

Note:
    These exceptions describe business failures. Database errors
    (django.db.DatabaseError and friends) are never wrapped; they
    propagate unchanged so the caller sees the real cause.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (ids, amounts, limits)

    Example:
        try:
            ledger.debit(account_id, Decimal("10"))
        except BaseApplicationError as e:
            logger.warning(f"Posting rejected: {e.error_code}")
            return e.to_dict()
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a serialisable dictionary.

        Returns:
            Dict with error, error_code and (when present) details keys

        Example:
            {
                "error": "Account 42 not found",
                "error_code": "ACCOUNT_NOT_FOUND",
                "details": {"account_id": "42"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when an input value cannot be used.

    Use for:
    - Malformed query parameters (pagination, date ranges)
    - Values outside an allowed range

    Example:
        raise ValidationError(
            "offset must not be negative",
            error_code="INVALID_OFFSET",
            details={"offset": offset},
        )

    Note:
        Unrelated to django.core.exceptions.ValidationError.
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        account = Account.objects.filter(id=account_id).first()
        if not account:
            raise NotFoundError(
                f"Account {account_id} not found",
                error_code="ACCOUNT_NOT_FOUND",
                details={"account_id": str(account_id)},
            )
    """

    default_error_code: str = "NOT_FOUND"


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Use for:
    - Lock acquisition timeouts (another writer holds the resource)
    - Attempts to modify records that are immutable

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
