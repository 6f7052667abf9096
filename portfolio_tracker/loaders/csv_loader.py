"""
Transaction loader for CSV exports in the standard template layout.

Expected headers: Date, Account, Symbol, Type, Quantity, Unit Price,
Total Amount, Currency, Fees, Commission, MER, Notes, Split Ratio,
Cash In Lieu. Only Date, Symbol, Type and Currency are always required.
"""
import logging
from datetime import datetime, time
from pathlib import Path
from typing import Mapping, Optional

import pandas as pd

from portfolio_tracker.core.config import ImportConfig
from portfolio_tracker.core.models import Transaction, TransactionType
from portfolio_tracker.utils.helpers import (
    clean_text,
    find_csv_files,
    parse_date,
    parse_number,
)
from portfolio_tracker.utils.validation import DEFAULT_COLUMNS, validate_transaction_row
from .base import BaseLoader


logger = logging.getLogger(__name__)


# Quantities whose sign is implied by the transaction type
UNSIGNED_QUANTITY_TYPES = {
    TransactionType.BUY,
    TransactionType.SELL,
    TransactionType.INITIAL_POSITION,
}


class TransactionCsvLoader(BaseLoader):
    """Loader for transaction CSV files."""

    def __init__(
        self,
        data_directory: Path,
        file_pattern: str = "*.csv",
        default_account_id: Optional[str] = None,
        columns: Mapping[str, str] = DEFAULT_COLUMNS,
        validation: Optional[ImportConfig] = None,
    ):
        """
        Initialise the CSV loader.

        Args:
            data_directory: Path to directory containing transaction CSV files.
            file_pattern: Glob pattern to match CSV files.
            default_account_id: Account used for rows without an Account value.
            columns: Mapping of canonical field name to CSV header.
            validation: Import rules for row validation.
        """
        super().__init__(data_directory)
        self.file_pattern = file_pattern
        self.default_account_id = default_account_id
        self.columns = dict(columns)
        self.validation = validation or ImportConfig()

    def load(self) -> list[Transaction]:
        """Load all transactions from matching CSV files."""
        csv_files = find_csv_files(self.data_directory, self.file_pattern)

        if not csv_files:
            logger.warning(f"No transaction CSV files found in {self.data_directory}")
            return []

        all_transactions: list[Transaction] = []

        for csv_file in csv_files:
            logger.info(f"Loading transaction file: {csv_file.name}")
            try:
                all_transactions.extend(self.load_file(csv_file))
            except Exception as e:
                logger.error(f"Error loading {csv_file}: {e}")

        # Stable sort keeps file order for same-dated rows
        all_transactions.sort(key=lambda t: t.date)
        logger.info(f"Loaded {len(all_transactions)} transactions")

        return all_transactions

    def load_file(self, csv_file: Path) -> list[Transaction]:
        """
        Load transactions from a single CSV file.

        Args:
            csv_file: Path to the CSV file.

        Returns:
            Transactions from valid rows, in file order.
        """
        df = pd.read_csv(csv_file, dtype=str, encoding="utf-8-sig", skip_blank_lines=True)
        df.columns = df.columns.str.strip()

        transactions: list[Transaction] = []
        skipped = 0

        for index, row in df.iterrows():
            result = validate_transaction_row(row, self.columns, self.validation)
            for warning in result.warnings:
                logger.warning(f"{csv_file.name} row {index + 2}: {warning}")

            if not result.is_valid:
                skipped += 1
                logger.warning(
                    f"{csv_file.name} row {index + 2} skipped: {'; '.join(result.errors)}"
                )
                continue

            transaction = self._parse_row(row)
            if transaction is None:
                skipped += 1
                continue
            transactions.append(transaction)

        if skipped:
            logger.warning(f"Skipped {skipped} invalid rows in {csv_file.name}")

        return transactions

    def _get(self, row: pd.Series, name: str):
        header = self.columns.get(name)
        if header is None:
            return None
        return row.get(header)

    def _parse_row(self, row: pd.Series) -> Optional[Transaction]:
        """Parse a validated CSV row into a Transaction."""
        account_id = self._determine_account(row)
        if not account_id:
            logger.warning("Row has no account and no default account is configured")
            return None

        tx_date = parse_date(self._get(row, "date"))
        if tx_date is None:
            return None

        tx_type = self._determine_transaction_type(row)
        quantity = parse_number(self._get(row, "quantity"))
        if quantity is not None and tx_type in UNSIGNED_QUANTITY_TYPES:
            quantity = abs(quantity)

        notes = clean_text(self._get(row, "notes"))
        if notes is not None:
            notes = notes[: self.validation.max_notes_length]

        return Transaction(
            account_id=account_id,
            symbol=clean_text(self._get(row, "symbol")),
            transaction_type=tx_type,
            date=datetime.combine(tx_date, time.min),
            quantity=quantity,
            unit_price=parse_number(self._get(row, "unit_price")),
            total_amount=parse_number(self._get(row, "total_amount")),
            currency=clean_text(self._get(row, "currency")) or "",
            fees=parse_number(self._get(row, "fees")),
            split_ratio=clean_text(self._get(row, "split_ratio")),
            cash_in_lieu=parse_number(self._get(row, "cash_in_lieu")),
            commission=parse_number(self._get(row, "commission")),
            mer=parse_number(self._get(row, "mer")),
            notes=notes,
        )

    def _determine_account(self, row: pd.Series) -> Optional[str]:
        """Use the row's Account value, falling back to the default account."""
        return clean_text(self._get(row, "account")) or self.default_account_id

    def _determine_transaction_type(self, row: pd.Series) -> TransactionType:
        """Determine transaction type from the Type column."""
        return TransactionType.parse(self._get(row, "type"))
