"""Shared pytest fixtures and configuration."""

from datetime import datetime

import pytest

from portfolio_tracker.core.models import Transaction, TransactionType
from tests.fixtures.test_data import (
    TEST_ACCOUNT_1,
    TEST_ACCOUNT_2,
    TEST_CSV_HEADER,
    TEST_CURRENCY_USD,
    TEST_DATE_1,
    TEST_DATE_2,
    TEST_DATE_3,
    TEST_SYMBOL_1,
    TEST_SYMBOL_2,
)


# ============================================================================
# TRANSACTION FACTORY
# ============================================================================


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""

    def _make(
        transaction_type=TransactionType.BUY,
        date=TEST_DATE_1,
        account_id=TEST_ACCOUNT_1,
        symbol=TEST_SYMBOL_1,
        currency=TEST_CURRENCY_USD,
        **kwargs,
    ) -> Transaction:
        if isinstance(date, str):
            date = datetime.strptime(date, "%Y-%m-%d")
        return Transaction(
            account_id=account_id,
            symbol=symbol,
            transaction_type=transaction_type,
            date=date,
            currency=currency,
            **kwargs,
        )

    return _make


# ============================================================================
# TRANSACTION FIXTURES
# ============================================================================


@pytest.fixture
def sample_buy(make_transaction):
    """A buy of 100 shares at 10.00."""
    return make_transaction(TransactionType.BUY, quantity=100.0, unit_price=10.0)


@pytest.fixture
def sample_transactions_list(make_transaction):
    """A small history across two accounts and two symbols."""
    return [
        make_transaction(TransactionType.BUY, TEST_DATE_1, quantity=100.0, unit_price=10.0),
        make_transaction(
            TransactionType.BUY,
            TEST_DATE_1,
            account_id=TEST_ACCOUNT_2,
            symbol=TEST_SYMBOL_2,
            quantity=10.0,
            unit_price=250.0,
            fees=10.0,
        ),
        make_transaction(
            TransactionType.SELL, TEST_DATE_2, quantity=40.0, unit_price=15.0, fees=5.0
        ),
        make_transaction(TransactionType.DIVIDEND, TEST_DATE_3, total_amount=12.0),
        make_transaction(
            TransactionType.DIVIDEND,
            TEST_DATE_3,
            account_id=TEST_ACCOUNT_2,
            symbol=TEST_SYMBOL_2,
            quantity=10.0,
            unit_price=0.75,
        ),
    ]


# ============================================================================
# FILE FIXTURES
# ============================================================================


@pytest.fixture
def transactions_dir(tmp_path):
    """Directory containing one transaction CSV in the template layout."""
    rows = [
        TEST_CSV_HEADER,
        "2024-01-15,acct-brokerage,aapl,buy,100,$10.00,,USD,5,,,First buy,,",
        "2024-02-20,acct-brokerage,AAPL,sell,-40,15.00,,USD,5,,,,,",
        "2024-03-10,acct-brokerage,AAPL,dividend,,,12.50,USD,,,,,,",
        "2024-03-11,acct-brokerage,AAPL,split_forward,,,,USD,,,,,2:1,",
        "2024-03-12,,MSFT,buy,10,250,,USD,,,,No account,,",
        "2024-03-13,acct-brokerage,,buy,10,250,,USD,,,,Missing symbol,,",
    ]
    directory = tmp_path / "transactions"
    directory.mkdir()
    (directory / "history.csv").write_text("\n".join(rows) + "\n")
    return directory


@pytest.fixture
def prices_file(tmp_path):
    """Price CSV with one bad row."""
    path = tmp_path / "prices.csv"
    path.write_text("Symbol,Price\naapl,12.00\nMSFT,\"$1,300.50\"\nRY,0\nXYZ,n/a\n")
    return path
