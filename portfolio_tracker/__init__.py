"""
Portfolio Tracker

Derives current holdings, average cost basis, and realized/unrealized
gains from a history of buys, sells, dividends, splits and initial
positions.

Example usage:
    from portfolio_tracker import (
        TransactionCsvLoader,
        calculate_holdings,
        calculate_portfolio_summary,
        load_price_map,
    )

    # Load transactions and prices
    loader = TransactionCsvLoader(Path("./data/transactions"))
    transactions = loader.load()
    prices = load_price_map(Path("./data/prices.csv"))

    # Calculate holdings
    holdings = calculate_holdings(transactions, prices)
    print(calculate_portfolio_summary(holdings))
"""

from portfolio_tracker.core.models import (
    AccountBreakdown,
    AverageCostMetrics,
    GroupKey,
    Holding,
    PortfolioSummary,
    Transaction,
    TransactionSummary,
    TransactionType,
)
from portfolio_tracker.core.config import Config, load_config
from portfolio_tracker.engine import (
    calculate_account_holdings,
    calculate_holdings,
    calculate_portfolio_summary,
    parse_split_ratio,
)
from portfolio_tracker.loaders import (
    BaseLoader,
    TransactionCsvLoader,
    load_price_map,
)
from portfolio_tracker.utils.reports import (
    TransactionFilter,
    filter_transactions,
    holdings_to_dataframe,
    summarise_transactions,
)
from portfolio_tracker.utils.validation import ValidationResult, validate_transaction_row


__version__ = "0.1.0"

__all__ = [
    # Models
    "AccountBreakdown",
    "AverageCostMetrics",
    "GroupKey",
    "Holding",
    "PortfolioSummary",
    "Transaction",
    "TransactionSummary",
    "TransactionType",
    # Engine
    "calculate_account_holdings",
    "calculate_holdings",
    "calculate_portfolio_summary",
    "parse_split_ratio",
    # Loaders
    "BaseLoader",
    "TransactionCsvLoader",
    "load_price_map",
    # Reports
    "TransactionFilter",
    "filter_transactions",
    "holdings_to_dataframe",
    "summarise_transactions",
    # Validation
    "ValidationResult",
    "validate_transaction_row",
    # Config
    "Config",
    "load_config",
]
