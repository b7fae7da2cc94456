"""
Ledger app configuration.

This app provides the posting engine, read-side queries and the summary
cache for account balances.
"""

from django.apps import AppConfig


class LedgerConfig(AppConfig):
    """Configuration for the ledger application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ledger"
    verbose_name = "Ledger"
