"""
Report generation for the portfolio tracker.

Transaction filtering and summaries, plus tabular views of holdings.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from portfolio_tracker.core.models import (
    Holding,
    Transaction,
    TransactionSummary,
    TransactionType,
)


logger = logging.getLogger(__name__)


HOLDING_COLUMNS = [
    "Account",
    "Symbol",
    "Currency",
    "Quantity",
    "Cost Basis",
    "Cost/Share",
    "Price",
    "Market Value",
    "Unrealized Gain",
    "Unrealized %",
    "Realized Gain",
    "Dividends",
    "Total Return",
    "Total Return %",
    "First Date",
    "Last Date",
]


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


@dataclass
class TransactionFilter:
    """Filter criteria for transaction queries."""

    account_ids: Optional[list[str]] = None
    symbols: Optional[list[str]] = None
    types: Optional[list[TransactionType]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None

    def matches(self, transaction: Transaction) -> bool:
        """Check if a transaction matches all filter criteria."""
        if self.account_ids and transaction.account_id not in self.account_ids:
            return False

        if self.symbols and transaction.symbol not in {s.upper() for s in self.symbols}:
            return False

        if self.types and transaction.transaction_type not in self.types:
            return False

        tx_date = transaction.date.date()

        if self.start_date and tx_date < _as_date(self.start_date):
            return False

        if self.end_date and tx_date > _as_date(self.end_date):
            return False

        if self.min_amount is not None and transaction.amount < self.min_amount:
            return False

        if self.max_amount is not None and transaction.amount > self.max_amount:
            return False

        return True


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: TransactionFilter,
) -> list[Transaction]:
    """
    Filter transactions by criteria.

    Args:
        transactions: Transactions to filter.
        criteria: TransactionFilter with filter parameters.

    Returns:
        Filtered list of transactions, in input order.
    """
    filtered = [tx for tx in transactions if criteria.matches(tx)]
    logger.debug(f"Filtered to {len(filtered)} transactions")
    return filtered


def summarise_transactions(transactions: Iterable[Transaction]) -> TransactionSummary:
    """
    Count transactions and total their gross amounts by type.

    Args:
        transactions: Transactions to summarise.

    Returns:
        TransactionSummary. Every transaction type appears in by_type,
        with zero counts for types not present.
    """
    transactions = list(transactions)
    by_type = Counter(tx.transaction_type for tx in transactions)
    by_symbol = Counter(tx.symbol for tx in transactions)

    def total(tx_type: TransactionType) -> float:
        return sum(tx.amount for tx in transactions if tx.transaction_type is tx_type)

    return TransactionSummary(
        total_buys=total(TransactionType.BUY),
        total_sells=total(TransactionType.SELL),
        total_dividends=total(TransactionType.DIVIDEND),
        transaction_count=len(transactions),
        by_symbol=dict(by_symbol),
        by_type={tx_type: by_type.get(tx_type, 0) for tx_type in TransactionType},
    )


def holdings_to_dataframe(holdings: Iterable[Holding]) -> pd.DataFrame:
    """
    Convert holdings to a pandas DataFrame.

    Args:
        holdings: Holdings to convert.

    Returns:
        DataFrame with one row per holding, or an empty DataFrame.
    """
    records = [holding.to_dict() for holding in holdings]
    if not records:
        return pd.DataFrame()

    df = pd.DataFrame(records)
    columns = [c for c in HOLDING_COLUMNS if c in df.columns]
    return df[columns]


def holdings_to_markdown(holdings: Iterable[Holding]) -> str:
    """Generate a markdown table from holdings."""
    df = holdings_to_dataframe(holdings)

    if df.empty:
        return "No holdings found."

    return df.to_markdown(index=False, floatfmt=",.2f")


def export_holdings_csv(holdings: Iterable[Holding], output_path: Path) -> None:
    """
    Export holdings to a CSV file.

    Args:
        holdings: Holdings to export.
        output_path: Path to output CSV file.
    """
    df = holdings_to_dataframe(holdings)
    df.to_csv(output_path, index=False)
    logger.info(f"Exported {len(df)} holdings to {output_path}")
