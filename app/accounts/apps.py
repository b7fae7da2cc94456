"""
Accounts app configuration.

This app owns account identity and the stored balance. Balances are
mutated only by the ledger app, never through this app's own API.
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Configuration for the accounts application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Accounts"
