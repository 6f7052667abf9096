"""
Utility functions for the portfolio tracker.
"""
from .helpers import (
    find_csv_files,
    parse_date,
    parse_money,
    parse_number,
)
from .reports import (
    TransactionFilter,
    filter_transactions,
    holdings_to_dataframe,
    summarise_transactions,
)
from .validation import DEFAULT_COLUMNS, ValidationResult, validate_transaction_row

__all__ = [
    "find_csv_files",
    "parse_date",
    "parse_money",
    "parse_number",
    "TransactionFilter",
    "filter_transactions",
    "holdings_to_dataframe",
    "summarise_transactions",
    "DEFAULT_COLUMNS",
    "ValidationResult",
    "validate_transaction_row",
]
