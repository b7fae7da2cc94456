"""
Django admin configuration for accounts.

Balances are shown but never editable here; they change only through
ledger postings.
"""

from django.contrib import admin

from .models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin configuration for Account."""

    list_display = ["id", "owner_id", "balance", "created_at", "updated_at"]
    search_fields = ["id", "owner_id"]
    readonly_fields = ["id", "balance", "created_at", "updated_at"]
    ordering = ["-created_at"]
