"""
Model mixins providing reusable functionality for Django models.

Available Mixins:
    UUIDPrimaryKeyMixin: Use UUID as primary key

Usage:
    from core.models import BaseModel
    from core.model_mixins import UUIDPrimaryKeyMixin

    class Account(UUIDPrimaryKeyMixin, BaseModel):
        balance = models.DecimalField(max_digits=20, decimal_places=4)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    Account and posting ids are handed to external callers, so they are
    opaque and safe to generate before the row is inserted.

    Fields:
        id: UUIDField as primary key (auto-generated)

    Usage:
        account = Account.objects.create(owner_id=owner_id)
        print(account.id)  # UUID like: 550e8400-e29b-41d4-a716-446655440000
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True
