"""
Ledger models for append-only postings.

This module defines:
- PostingKind: CREDIT (adds to the balance) or DEBIT (subtracts)
- Posting: one immutable movement of value against one account

The stored amount is always positive; the sign is carried by the kind.
An account's balance equals the sum of its credit amounts minus the sum
of its debit amounts.

Usage:
    from ledger.models import Posting, PostingKind

    Posting.objects.filter(account_id=account_id, kind=PostingKind.CREDIT)
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.db.models import Q

from accounts.models import BALANCE_DECIMAL_PLACES, BALANCE_MAX_DIGITS, Account
from core.model_mixins import UUIDPrimaryKeyMixin

from .exceptions import ImmutablePosting


class PostingKind(models.TextChoices):
    """
    Direction of a posting.

    Values:
        CREDIT: Money in; increases the balance
        DEBIT: Money out; decreases the balance, never below zero
    """

    CREDIT = "credit", "Credit"
    DEBIT = "debit", "Debit"

    def signed(self, amount: Decimal) -> Decimal:
        """Return the amount with the sign this kind applies to a balance."""
        return amount if self == PostingKind.CREDIT else -amount

    @classmethod
    def coerce(cls, value: PostingKind | str) -> PostingKind:
        """
        Resolve a kind from a member, its value ("credit") or its name ("CREDIT").

        Raises:
            ValueError: If the value names neither kind
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(f"{value!r} is not a valid posting kind")


class Posting(UUIDPrimaryKeyMixin, models.Model):
    """
    A single credit or debit recorded against an account.

    Postings are written exactly once, in the same database transaction
    that updates the account balance, and are never changed afterwards.
    save() on an existing row and delete() both raise ImmutablePosting.

    Fields:
        id: UUID primary key (from UUIDPrimaryKeyMixin)
        account: Owning account
        kind: credit or debit
        amount: Positive magnitude, exact decimal
        description: Optional free text supplied by the caller
        created_at: Server timestamp; the ordering key for history

    Constraints:
        - amount must be positive
    """

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="postings",
        help_text="Account this posting belongs to",
    )
    kind = models.CharField(
        max_length=10,
        choices=PostingKind.choices,
        help_text="Whether this posting credits or debits the account",
    )
    amount = models.DecimalField(
        max_digits=BALANCE_MAX_DIGITS,
        decimal_places=BALANCE_DECIMAL_PLACES,
        help_text="Positive amount; the sign comes from kind",
    )
    description = models.TextField(
        null=True,
        blank=True,
        help_text="Optional note supplied with the posting",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this posting was recorded",
    )

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["account", "created_at"],
                name="ledger_posting_account_time",
            ),
            models.Index(
                fields=["account", "kind"],
                name="ledger_posting_account_kind",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="ledger_posting_amount_positive",
            )
        ]

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.get_kind_display()} {self.amount} on {self.account_id}"

    @property
    def signed_amount(self) -> Decimal:
        """Amount as it applies to the balance (negative for debits)."""
        return PostingKind(self.kind).signed(self.amount)

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding:
            raise ImmutablePosting(
                f"Posting {self.pk} is immutable",
                details={"posting_id": str(self.pk)},
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutablePosting(
            f"Posting {self.pk} cannot be deleted",
            details={"posting_id": str(self.pk)},
        )
