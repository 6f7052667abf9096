"""
Utility functions for the portfolio tracker.

Contains helpers for parsing dates, numbers, and locating input files.
"""
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pandas as pd


logger = logging.getLogger(__name__)


DEFAULT_DATE_FORMATS = [
    "%Y-%m-%d",           # 2024-01-15
    "%Y-%m-%dT%H:%M:%S",  # 2024-01-15T14:30:00
    "%Y-%m-%d %H:%M:%S",  # 2024-01-15 14:30:00
    "%m/%d/%Y",           # 01/15/2024
    "%d %b %Y",           # 15 Jan 2024
    "%b %d, %Y",          # Jan 15, 2024
]


def is_blank(value) -> bool:
    """Returns True for None, NaN and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_date(
    value: str,
    formats: Optional[list[str]] = None,
) -> Optional[date]:
    """
    Parse a date string into a date object.

    Args:
        value: The date string to parse.
        formats: List of date formats to try. Defaults to ISO first,
            then common US formats.

    Returns:
        Parsed date or None if parsing fails.
    """
    if is_blank(value):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if formats is None:
        formats = DEFAULT_DATE_FORMATS

    value = str(value).strip()

    for fmt in formats:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    logger.warning(f"Could not parse date: {value}")
    return None


def parse_number(value: str | float) -> Optional[float]:
    """
    Parse a numeric value, stripping currency symbols and thousands separators.

    Args:
        value: The value to parse (e.g., "$1,234.56", "-500", 12.5).

    Returns:
        Parsed float, or None if the value is blank or not a number.
    """
    if is_blank(value):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    cleaned = re.sub(r"[£€$,\s]", "", str(value))

    try:
        return float(cleaned)
    except ValueError:
        logger.warning(f"Could not parse number: {value}")
        return None


def parse_money(value: str | float) -> float:
    """
    Parse a monetary value string into a float.

    Args:
        value: The monetary value to parse (e.g., "$1,234.56", "1234.56", "-$500").

    Returns:
        Parsed float value, or 0.0 if parsing fails.
    """
    result = parse_number(value)
    return 0.0 if result is None else result


def clean_text(value) -> Optional[str]:
    """Strip a cell value to text, mapping blanks to None."""
    if is_blank(value):
        return None
    return str(value).strip()


def find_csv_files(directory: Path, pattern: str) -> list[Path]:
    """
    Find CSV files in a directory matching a glob pattern.

    Args:
        directory: The directory to search.
        pattern: Glob pattern to match (e.g., "*.csv", "transactions-*.csv").

    Returns:
        List of matching file paths, sorted by name.
    """
    if not directory.exists():
        logger.warning(f"Directory does not exist: {directory}")
        return []

    files = sorted(directory.glob(pattern))
    logger.debug(f"Found {len(files)} files matching '{pattern}' in {directory}")
    return files
