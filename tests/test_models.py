"""Unit tests for portfolio_tracker/core/models.py data models."""

from datetime import date, datetime, timedelta, timezone

import pytest

from portfolio_tracker.core.models import (
    GroupKey,
    Transaction,
    TransactionType,
)
from portfolio_tracker.engine.replay import calculate_position
from tests.fixtures.test_data import (
    TEST_ACCOUNT_1,
    TEST_DATE_1,
    TEST_SYMBOL_1,
)


class TestTransactionType:
    """Test TransactionType enum."""

    def test_parse_from_string(self):
        """Test parsing is case-insensitive and trims whitespace."""
        assert TransactionType.parse("buy") == TransactionType.BUY
        assert TransactionType.parse(" SPLIT_Reverse ") == TransactionType.SPLIT_REVERSE

    def test_parse_passes_enum_through(self):
        """Test an enum member is returned unchanged."""
        assert TransactionType.parse(TransactionType.SELL) is TransactionType.SELL

    def test_parse_invalid_type(self):
        """Test an unknown type raises ValueError listing valid types."""
        with pytest.raises(ValueError, match="Invalid transaction type"):
            TransactionType.parse("transfer")

    def test_str_is_label(self):
        """Test string form is the display label."""
        assert str(TransactionType.SPLIT_FORWARD) == "Stock Split (Forward)"
        assert str(TransactionType.INITIAL_POSITION) == "Initial Position"

    def test_description(self):
        """Test every type has a description."""
        assert all(t.description for t in TransactionType)

    def test_is_purchase(self):
        """Test purchase classification."""
        assert TransactionType.BUY.is_purchase is True
        assert TransactionType.INITIAL_POSITION.is_purchase is True
        assert TransactionType.SELL.is_purchase is False

    def test_is_split(self):
        """Test split classification."""
        assert TransactionType.SPLIT_FORWARD.is_split is True
        assert TransactionType.SPLIT_REVERSE.is_split is True
        assert TransactionType.DIVIDEND.is_split is False


class TestTransaction:
    """Test Transaction model."""

    def test_transaction_creation(self):
        """Test creating a transaction normalises its fields."""
        tx = Transaction(
            account_id=f" {TEST_ACCOUNT_1} ",
            symbol=" aapl ",
            transaction_type="buy",
            date=TEST_DATE_1,
            quantity=100.0,
            unit_price=10.5,
            currency="usd",
        )

        assert tx.account_id == TEST_ACCOUNT_1
        assert tx.symbol == TEST_SYMBOL_1
        assert tx.transaction_type == TransactionType.BUY
        assert tx.date == TEST_DATE_1
        assert tx.currency == "USD"
        assert tx.key == GroupKey(TEST_ACCOUNT_1, TEST_SYMBOL_1)

    def test_plain_date_becomes_datetime(self):
        """Test a date is normalised to midnight."""
        tx = Transaction(TEST_ACCOUNT_1, TEST_SYMBOL_1, TransactionType.BUY, date(2024, 1, 15))

        assert tx.date == datetime(2024, 1, 15)

    @pytest.mark.parametrize("account_id", ["", "   ", None])
    def test_missing_account_raises(self, account_id):
        """Test a blank account id is a structural error."""
        with pytest.raises(ValueError, match="account_id"):
            Transaction(account_id, TEST_SYMBOL_1, TransactionType.BUY, TEST_DATE_1)

    @pytest.mark.parametrize("symbol", ["", "   ", None])
    def test_missing_symbol_raises(self, symbol):
        """Test a blank symbol is a structural error."""
        with pytest.raises(ValueError, match="symbol"):
            Transaction(TEST_ACCOUNT_1, symbol, TransactionType.BUY, TEST_DATE_1)

    def test_aware_datetime_becomes_naive_utc(self):
        """Test timezone-aware dates are stored as naive UTC."""
        eastern = timezone(timedelta(hours=-5))
        tx = Transaction(
            TEST_ACCOUNT_1,
            TEST_SYMBOL_1,
            TransactionType.BUY,
            datetime(2024, 1, 15, 20, 0, tzinfo=eastern),
        )

        assert tx.date == datetime(2024, 1, 16, 1, 0)
        assert tx.date.tzinfo is None

    def test_naive_and_aware_dates_replay_together(self, make_transaction):
        """Test a group mixing naive and aware dates sorts and replays."""
        holding = calculate_position(
            [
                make_transaction(
                    date=datetime(2024, 2, 20, tzinfo=timezone.utc),
                    quantity=5.0,
                    unit_price=12.0,
                ),
                make_transaction(date=TEST_DATE_1, quantity=10.0, unit_price=10.0),
            ],
            TEST_ACCOUNT_1,
            TEST_SYMBOL_1,
        )

        assert holding.quantity == 15.0
        assert holding.avg_cost.cost_basis == 160.0
        assert holding.first_transaction_date == TEST_DATE_1

    def test_invalid_date_raises(self):
        """Test a string date is rejected."""
        with pytest.raises(ValueError, match="date"):
            Transaction(TEST_ACCOUNT_1, TEST_SYMBOL_1, TransactionType.BUY, "2024-01-15")

    def test_negative_quantity_is_allowed(self):
        """Test economic values are not validated."""
        tx = Transaction(
            TEST_ACCOUNT_1, TEST_SYMBOL_1, TransactionType.BUY, TEST_DATE_1, quantity=-5.0
        )

        assert tx.quantity == -5.0

    def test_is_immutable(self, sample_buy):
        """Test transactions cannot be modified after creation."""
        with pytest.raises(AttributeError):
            sample_buy.quantity = 1.0

    def test_amount_from_quantity_and_price(self, make_transaction):
        """Test amount prefers quantity x price."""
        tx = make_transaction(quantity=10.0, unit_price=2.0, total_amount=99.0)

        assert tx.amount == 20.0

    def test_amount_falls_back_to_total(self, make_transaction):
        """Test amount uses total amount without a price."""
        tx = make_transaction(TransactionType.DIVIDEND, total_amount=50.0)

        assert tx.amount == 50.0

    def test_amount_defaults_to_zero(self, make_transaction):
        """Test amount is zero when nothing is given."""
        assert make_transaction(TransactionType.SPLIT_FORWARD, split_ratio="2:1").amount == 0.0

    def test_to_dict(self, sample_buy):
        """Test dictionary conversion for DataFrames."""
        result = sample_buy.to_dict()

        assert result["Date"] == "2024-01-15"
        assert result["Symbol"] == TEST_SYMBOL_1
        assert result["Type"] == "Buy"
        assert result["Quantity"] == 100.0


class TestHolding:
    """Test Holding model."""

    def test_to_dict(self, sample_buy):
        """Test dictionary conversion uses formatted dates."""
        holding = calculate_position([sample_buy], TEST_ACCOUNT_1, TEST_SYMBOL_1, 12.0)
        result = holding.to_dict()

        assert result["Account"] == TEST_ACCOUNT_1
        assert result["Cost Basis"] == 1000.0
        assert result["Market Value"] == 1200.0
        assert result["First Date"] == "2024-01-15"
        assert holding.key == GroupKey(TEST_ACCOUNT_1, TEST_SYMBOL_1)
