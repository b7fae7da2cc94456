"""
Core base model providing common functionality for domain models.

Base Classes:
    BaseModel: Abstract model with timestamps (created_at, updated_at)

For mixins (UUIDPrimaryKeyMixin), see core.model_mixins.

Usage:
    from core.models import BaseModel
    from core.model_mixins import UUIDPrimaryKeyMixin

    class Account(UUIDPrimaryKeyMixin, BaseModel):
        balance = models.DecimalField(max_digits=20, decimal_places=4)

Note:
    - Always list mixins before BaseModel in inheritance
    - Append-only records (ledger postings) do not use BaseModel because
      they have no meaningful updated_at
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model providing creation and modification timestamps.

    Fields:
        created_at: Automatically set when the object is first created
        updated_at: Automatically updated whenever the object is saved

    Note:
        When combined with a mixin listed first, Django does not inherit
        this Meta automatically; subclasses should declare
        ``class Meta(BaseModel.Meta)`` to keep the default ordering.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        """Default string representation using primary key."""
        return f"{self.__class__.__name__}(id={self.pk})"
