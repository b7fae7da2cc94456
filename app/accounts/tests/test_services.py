"""
Tests for AccountService.

This module tests the account store operations the ledger relies on:
creation, lookup, ownership checks, row locking and balance updates.
"""

import uuid
from decimal import Decimal

import pytest
from django.db import transaction

from accounts.exceptions import AccountNotFound
from accounts.models import Account
from accounts.services import AccountService
from accounts.tests.factories import AccountFactory


class TestOpenAccount:
    """Tests for AccountService.open_account()."""

    def test_creates_account_with_zero_balance(self, db):
        owner_id = uuid.uuid4()

        account = AccountService.open_account(owner_id)

        assert account.owner_id == owner_id
        assert account.balance == Decimal("0")
        assert Account.objects.filter(id=account.id).exists()


class TestGetAccount:
    """Tests for AccountService.get_account()."""

    def test_returns_account_by_id(self, db):
        created = AccountFactory()

        assert AccountService.get_account(created.id).id == created.id

    def test_accepts_string_id(self, db):
        created = AccountFactory()

        assert AccountService.get_account(str(created.id)).id == created.id

    def test_raises_for_unknown_id(self, db):
        missing = uuid.uuid4()

        with pytest.raises(AccountNotFound) as exc_info:
            AccountService.get_account(missing)

        assert exc_info.value.details == {"account_id": str(missing)}
        assert exc_info.value.error_code == "ACCOUNT_NOT_FOUND"

    def test_raises_for_malformed_id(self, db):
        with pytest.raises(AccountNotFound):
            AccountService.get_account("not-a-uuid")


class TestGetAccountForOwner:
    """Tests for AccountService.get_account_for_owner()."""

    def test_returns_account_for_owner(self, db):
        account = AccountFactory()

        fetched = AccountService.get_account_for_owner(account.id, account.owner_id)

        assert fetched.id == account.id

    def test_hides_accounts_of_other_owners(self, db):
        """Should report someone else's account as not found."""
        account = AccountFactory()

        with pytest.raises(AccountNotFound):
            AccountService.get_account_for_owner(account.id, uuid.uuid4())


class TestListAccountsForOwner:
    """Tests for AccountService.list_accounts_for_owner()."""

    def test_lists_only_owned_accounts(self, db):
        owner_id = uuid.uuid4()
        mine = [AccountFactory(owner_id=owner_id) for _ in range(2)]
        AccountFactory()

        result = AccountService.list_accounts_for_owner(owner_id)

        assert {a.id for a in result} == {a.id for a in mine}

    def test_malformed_owner_returns_empty_list(self, db):
        assert AccountService.list_accounts_for_owner("nope") == []


class TestLockAccount:
    """Tests for AccountService.lock_account()."""

    def test_returns_account_inside_transaction(self, db):
        account = AccountFactory()

        with transaction.atomic():
            locked = AccountService.lock_account(account.id)

        assert locked is not None
        assert locked.id == account.id

    def test_returns_none_for_missing_account(self, db):
        with transaction.atomic():
            assert AccountService.lock_account(uuid.uuid4()) is None

    def test_returns_none_for_malformed_id(self, db):
        with transaction.atomic():
            assert AccountService.lock_account("garbage") is None


class TestUpdateBalance:
    """Tests for AccountService.update_balance()."""

    def test_persists_new_balance(self, db):
        account = AccountFactory()

        AccountService.update_balance(account, Decimal("42.5"))
        account.refresh_from_db()

        assert account.balance == Decimal("42.5")

    def test_bumps_updated_at(self, db):
        account = AccountFactory()
        before = account.updated_at

        AccountService.update_balance(account, Decimal("1"))
        account.refresh_from_db()

        assert account.updated_at >= before
