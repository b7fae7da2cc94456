"""
Account model holding the authoritative current balance.

Usage:
    from accounts.models import Account

    account = Account.objects.create(owner_id=user_id)
    account.balance  # Decimal("0.0000")
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.db.models import Q

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

# Shared with ledger.amounts so stored balances and posting amounts use the
# same fixed-point shape.
BALANCE_MAX_DIGITS = 20
BALANCE_DECIMAL_PLACES = 4


class Account(UUIDPrimaryKeyMixin, BaseModel):
    """
    A money-tracking account owned by a user.

    The balance is a denormalised running total that the ledger keeps equal
    to the signed sum of the account's postings. It is never edited
    directly; LedgerService.post() is the only writer.

    Fields:
        id: UUID primary key (from UUIDPrimaryKeyMixin)
        owner_id: UUID of the owning user (users live outside this service)
        balance: Current balance, exact decimal, never negative
        created_at / updated_at: Timestamps (from BaseModel)

    Constraints:
        - balance >= 0
    """

    owner_id = models.UUIDField(
        db_index=True,
        help_text="UUID of the user that owns this account",
    )
    balance = models.DecimalField(
        max_digits=BALANCE_MAX_DIGITS,
        decimal_places=BALANCE_DECIMAL_PLACES,
        default=Decimal("0"),
        help_text="Current balance; equals the signed sum of all postings",
    )

    class Meta(BaseModel.Meta):
        constraints = [
            models.CheckConstraint(
                condition=Q(balance__gte=0),
                name="account_balance_non_negative",
            )
        ]

    def __str__(self) -> str:
        """Return string representation."""
        return f"Account {self.id} ({self.balance})"
