"""
Base class for file-based transaction sources.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import pandas as pd

from portfolio_tracker.core.models import Transaction, TransactionType


logger = logging.getLogger(__name__)


class BaseLoader(ABC):
    """Reads transaction files from one directory into Transaction objects."""

    def __init__(self, data_directory: Path | str):
        """
        Args:
            data_directory: Directory holding the transaction files.
        """
        self.data_directory = Path(data_directory)
        logger.info(f"{self.__class__.__name__} reading from {self.data_directory}")

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Read every matching file in the data directory.

        Returns:
            Transactions from all files, ordered by date.
        """

    @abstractmethod
    def load_file(self, path: Path) -> list[Transaction]:
        """
        Read one file.

        Returns:
            Transactions from its valid rows, in file order.
        """

    @abstractmethod
    def _parse_row(self, row: pd.Series) -> Optional[Transaction]:
        """Build a Transaction from one row, or None to skip it."""

    @abstractmethod
    def _determine_account(self, row: pd.Series) -> Optional[str]:
        """Account id for a row, or None if it has none."""

    @abstractmethod
    def _determine_transaction_type(self, row: pd.Series) -> TransactionType:
        """Transaction type for a row."""
