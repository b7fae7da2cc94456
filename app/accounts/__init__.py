"""
Accounts - account identity and the stored current balance.

Public API:
    Models:
        Account - Balance-holding account owned by a user

    Service:
        AccountService - Lookup, ownership checks, row locking, balance writes

    Exceptions:
        AccountNotFound - Account lookup failures

Usage:
    from accounts.services import AccountService

    account = AccountService.open_account(owner_id=user_id)
"""
