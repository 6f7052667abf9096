"""
Validation of imported transaction rows.

Runs before rows become Transaction objects. The holdings engine itself
accepts any well-formed history, so checks on economic plausibility
(non-zero quantities, non-negative fees, no future dates) live here.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional

from portfolio_tracker.core.config import ImportConfig
from portfolio_tracker.core.models import TransactionType
from portfolio_tracker.engine.splits import parse_split_ratio
from portfolio_tracker.utils.helpers import is_blank, parse_date, parse_number


logger = logging.getLogger(__name__)


# Canonical field name -> CSV header
DEFAULT_COLUMNS = {
    "date": "Date",
    "account": "Account",
    "symbol": "Symbol",
    "type": "Type",
    "quantity": "Quantity",
    "unit_price": "Unit Price",
    "total_amount": "Total Amount",
    "currency": "Currency",
    "fees": "Fees",
    "commission": "Commission",
    "mer": "MER",
    "notes": "Notes",
    "split_ratio": "Split Ratio",
    "cash_in_lieu": "Cash In Lieu",
}

PRICED_TYPES = {TransactionType.BUY, TransactionType.SELL, TransactionType.INITIAL_POSITION}


@dataclass
class ValidationResult:
    """Outcome of validating one row."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _cell(row: Mapping, columns: Mapping[str, str], name: str):
    header = columns.get(name)
    if header is None:
        return None
    return row.get(header)


def _is_non_zero(value) -> bool:
    number = parse_number(value)
    return number is not None and abs(number) > 0


def validate_transaction_row(
    row: Mapping,
    columns: Mapping[str, str] = DEFAULT_COLUMNS,
    config: Optional[ImportConfig] = None,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Validate a single imported row.

    Args:
        row: Row values keyed by CSV header (a dict or pandas Series).
        columns: Mapping of canonical field name to CSV header.
        config: Import rules. Defaults to ImportConfig().
        today: Reference date for the future-date check. Defaults to today.

    Returns:
        ValidationResult with any errors and warnings.
    """
    config = config or ImportConfig()
    today = today or date.today()
    result = ValidationResult()
    errors = result.errors
    warnings = result.warnings

    # Date
    raw_date = _cell(row, columns, "date")
    if is_blank(raw_date):
        errors.append("Date is required")
    else:
        parsed = parse_date(raw_date)
        if parsed is None:
            errors.append("Invalid date format (expected YYYY-MM-DD)")
        elif parsed > today:
            errors.append("Date cannot be in the future")

    # Symbol
    symbol = _cell(row, columns, "symbol")
    if is_blank(symbol):
        errors.append("Symbol is required")
    elif len(str(symbol).strip()) > config.max_symbol_length:
        errors.append(f"Symbol too long (max {config.max_symbol_length} characters)")

    # Type
    tx_type: Optional[TransactionType] = None
    raw_type = _cell(row, columns, "type")
    if is_blank(raw_type):
        errors.append("Type is required")
    else:
        try:
            tx_type = TransactionType.parse(raw_type)
        except ValueError as e:
            errors.append(str(e))

    # Currency
    currency = _cell(row, columns, "currency")
    if is_blank(currency):
        errors.append("Currency is required")
    elif str(currency).strip().upper() not in config.valid_currencies:
        warnings.append(
            f'Currency "{str(currency).strip()}" not in standard list '
            f"({', '.join(config.valid_currencies)})"
        )

    quantity = _cell(row, columns, "quantity")
    unit_price = _cell(row, columns, "unit_price")

    # Sell exports may carry negative quantities; the type sets the direction
    if tx_type in PRICED_TYPES:
        if is_blank(quantity):
            errors.append("Quantity is required for buy/sell/initial_position")
        elif not _is_non_zero(quantity):
            errors.append("Quantity must be a non-zero number")

        if is_blank(unit_price):
            errors.append("Unit price is required for buy/sell/initial_position")
        elif not _is_non_zero(unit_price):
            errors.append("Unit price must be a non-zero number")

    if tx_type is TransactionType.DIVIDEND:
        if not (_is_non_zero(quantity) and _is_non_zero(unit_price)):
            total_amount = _cell(row, columns, "total_amount")
            if is_blank(total_amount):
                errors.append("Dividend requires either (Quantity + Unit Price) or Total Amount")
            elif not _is_non_zero(total_amount):
                errors.append("Total amount must be a non-zero number")

    if tx_type is not None and tx_type.is_split:
        split_ratio = _cell(row, columns, "split_ratio")
        if is_blank(split_ratio):
            errors.append("Split ratio is required for stock splits")
        elif parse_split_ratio(str(split_ratio)) == 1:
            errors.append("Split ratio must be in N:M form (e.g. 2:1)")

    # Optional non-negative amounts
    for name, label in (
        ("fees", "Fees"),
        ("commission", "Commission"),
        ("mer", "MER"),
        ("cash_in_lieu", "Cash in lieu"),
    ):
        value = _cell(row, columns, name)
        if is_blank(value):
            continue
        number = parse_number(value)
        if number is None:
            errors.append(f"{label} must be a valid number")
        elif number < 0:
            errors.append(f"{label} must be a non-negative number")

    notes = _cell(row, columns, "notes")
    if not is_blank(notes) and len(str(notes)) > config.max_notes_length:
        warnings.append(f"Notes truncated to {config.max_notes_length} characters")

    return result
