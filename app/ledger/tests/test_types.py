"""Tests for ledger value types."""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from ledger.models import PostingKind
from ledger.types import BalanceCheck, TransactionFilters, TransactionPage


class TestTransactionFilters:
    """Tests for TransactionFilters validation."""

    def test_defaults(self):
        filters = TransactionFilters(account_id=uuid.uuid4())

        assert filters.limit == 20
        assert filters.offset == 0
        assert filters.kind is None

    def test_default_limit_follows_setting(self, settings):
        settings.LEDGER_DEFAULT_PAGE_SIZE = 50

        assert TransactionFilters(account_id=uuid.uuid4()).limit == 50

    def test_kind_string_is_coerced(self):
        filters = TransactionFilters(account_id=uuid.uuid4(), kind="debit")

        assert filters.kind is PostingKind.DEBIT

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            TransactionFilters(account_id=uuid.uuid4(), kind="refund")

        assert exc_info.value.error_code == "INVALID_POSTING_KIND"

    @pytest.mark.parametrize("limit", [0, -1, 101])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValidationError) as exc_info:
            TransactionFilters(account_id=uuid.uuid4(), limit=limit)

        assert exc_info.value.error_code == "INVALID_LIMIT"

    def test_max_limit_accepted(self):
        assert TransactionFilters(account_id=uuid.uuid4(), limit=100).limit == 100

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            TransactionFilters(account_id=uuid.uuid4(), offset=-1)

        assert exc_info.value.error_code == "INVALID_OFFSET"

    def test_inverted_date_range_rejected(self):
        now = datetime.now(timezone.utc)

        with pytest.raises(ValidationError) as exc_info:
            TransactionFilters(
                account_id=uuid.uuid4(),
                date_from=now,
                date_to=now - timedelta(days=1),
            )

        assert exc_info.value.error_code == "INVALID_DATE_RANGE"

    def test_single_instant_range_allowed(self):
        now = datetime.now(timezone.utc)

        filters = TransactionFilters(account_id=uuid.uuid4(), date_from=now, date_to=now)

        assert filters.date_from == filters.date_to


class TestTransactionPage:
    """Tests for TransactionPage.has_more."""

    def test_has_more_when_rows_remain(self):
        page = TransactionPage(data=[object()] * 20, total=25, limit=20, offset=0)

        assert page.has_more is True

    def test_last_page(self):
        page = TransactionPage(data=[object()] * 5, total=25, limit=20, offset=20)

        assert page.has_more is False

    def test_empty_page(self):
        assert TransactionPage().has_more is False


class TestBalanceCheck:
    """Tests for BalanceCheck."""

    def test_consistent(self):
        check = BalanceCheck(uuid.uuid4(), stored=Decimal("70.5"), derived=Decimal("70.5000"))

        assert check.is_consistent
        assert check.difference == Decimal("0")

    def test_difference(self):
        check = BalanceCheck(uuid.uuid4(), stored=Decimal("100"), derived=Decimal("90"))

        assert not check.is_consistent
        assert check.difference == Decimal("10")
