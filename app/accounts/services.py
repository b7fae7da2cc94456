"""
Account store operations used by the ledger.

AccountService is the only code path that reads or writes Account rows.
It exposes the three operations the ledger engine relies on (lock,
update, read-or-fail) plus the thin creation/ownership helpers that the
surrounding API layer calls before handing an account id to the ledger.

Usage:
    from accounts.services import AccountService

    account = AccountService.open_account(owner_id=user.id)
    AccountService.get_account_for_owner(account.id, user.id)

    with transaction.atomic():
        locked = AccountService.lock_account(account.id)
        AccountService.update_balance(locked, locked.balance + amount)
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from core.helpers import parse_uuid

from .exceptions import AccountNotFound
from .models import Account

if TYPE_CHECKING:
    from decimal import Decimal

logger = logging.getLogger(__name__)


class AccountService:
    """
    Stateless service for account persistence.

    All methods are static - no instance state is maintained.
    """

    @staticmethod
    def open_account(owner_id: uuid.UUID) -> Account:
        """
        Create a new account with a zero balance.

        Args:
            owner_id: UUID of the owning user

        Returns:
            The newly created Account
        """
        account = Account.objects.create(owner_id=owner_id)
        logger.info(f"Opened account {account.id} for owner {owner_id}")
        return account

    @staticmethod
    def get_account(account_id: uuid.UUID | str) -> Account:
        """
        Get account by ID without locking it.

        Args:
            account_id: UUID of the account (string form accepted)

        Returns:
            The Account

        Raises:
            AccountNotFound: If the id is malformed or no such account exists
        """
        pk = parse_uuid(account_id)
        if pk is None:
            raise AccountNotFound(account_id)
        try:
            return Account.objects.get(id=pk)
        except Account.DoesNotExist:
            raise AccountNotFound(account_id)

    @staticmethod
    def get_account_for_owner(
        account_id: uuid.UUID | str,
        owner_id: uuid.UUID | str,
    ) -> Account:
        """
        Get an account only if it belongs to the given owner.

        Args:
            account_id: UUID of the account
            owner_id: UUID of the user making the request

        Returns:
            The Account

        Raises:
            AccountNotFound: If missing or owned by someone else
        """
        account = AccountService.get_account(account_id)
        if account.owner_id != parse_uuid(owner_id):
            logger.debug(
                f"Account {account_id} requested by non-owner {owner_id}"
            )
            raise AccountNotFound(account_id)
        return account

    @staticmethod
    def list_accounts_for_owner(owner_id: uuid.UUID | str) -> list[Account]:
        """
        List all accounts belonging to an owner, newest first.

        Args:
            owner_id: UUID of the owning user

        Returns:
            List of Account objects (empty for malformed ids)
        """
        pk = parse_uuid(owner_id)
        if pk is None:
            return []
        return list(Account.objects.filter(owner_id=pk))

    @staticmethod
    def lock_account(account_id: uuid.UUID | str) -> Account | None:
        """
        Load an account under an exclusive row lock.

        Issues SELECT ... FOR UPDATE. Must be called inside
        transaction.atomic(); the lock is held until that transaction
        commits or rolls back.

        Args:
            account_id: UUID of the account

        Returns:
            The locked Account, or None if it does not exist
        """
        pk = parse_uuid(account_id)
        if pk is None:
            return None
        return Account.objects.select_for_update().filter(id=pk).first()

    @staticmethod
    def update_balance(account: Account, balance: Decimal) -> Account:
        """
        Persist a new balance for an account.

        Only the balance and updated_at columns are written.

        Args:
            account: Account previously returned by lock_account()
            balance: New balance

        Returns:
            The updated Account
        """
        account.balance = balance
        account.save(update_fields=["balance", "updated_at"])
        return account
