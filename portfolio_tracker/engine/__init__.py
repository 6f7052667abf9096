"""
Holdings computation engine.

Pure, synchronous functions that turn a transaction history into
holdings and a portfolio summary. Nothing here performs I/O or keeps
state between calls.
"""
from portfolio_tracker.engine.grouping import group_transactions
from portfolio_tracker.engine.holdings import (
    PriceMap,
    calculate_account_holdings,
    calculate_holdings,
)
from portfolio_tracker.engine.replay import (
    QUANTITY_EPSILON,
    apply_initial_position_filter,
    calculate_position,
    sort_chronologically,
)
from portfolio_tracker.engine.splits import parse_split_ratio
from portfolio_tracker.engine.summary import calculate_portfolio_summary

__all__ = [
    "PriceMap",
    "QUANTITY_EPSILON",
    "apply_initial_position_filter",
    "calculate_account_holdings",
    "calculate_holdings",
    "calculate_portfolio_summary",
    "calculate_position",
    "group_transactions",
    "parse_split_ratio",
    "sort_chronologically",
]
