"""
Django admin configuration for postings.

Postings are immutable, so the admin is read-only: no add, change or
delete. Corrections are new postings made through LedgerService.
"""

from django.contrib import admin

from .models import Posting


@admin.register(Posting)
class PostingAdmin(admin.ModelAdmin):
    """Admin configuration for Posting."""

    list_display = ["id", "created_at", "kind", "amount", "account", "description"]
    list_filter = ["kind", "created_at"]
    search_fields = ["id", "account__id", "description"]
    readonly_fields = ["id", "account", "kind", "amount", "description", "created_at"]
    date_hierarchy = "created_at"
    ordering = ["-created_at", "-id"]

    def has_delete_permission(self, request, obj=None) -> bool:
        """Postings are immutable - disable delete."""
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        """Postings are immutable - disable edit."""
        return False

    def has_add_permission(self, request) -> bool:
        """
        Disable adding postings through admin.

        A posting without the matching balance update would break the
        account's balance, so postings are only created by LedgerService.
        """
        return False
