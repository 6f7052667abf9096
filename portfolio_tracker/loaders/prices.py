"""
Loader for a local symbol -> price file.

The file is a CSV with Symbol and Price columns. Prices are whatever the
user exported from their price source; nothing is fetched here.
"""
import logging
from pathlib import Path

import pandas as pd

from portfolio_tracker.utils.helpers import clean_text, parse_number


logger = logging.getLogger(__name__)


def load_price_map(
    path: str | Path,
    symbol_column: str = "Symbol",
    price_column: str = "Price",
) -> dict[str, float]:
    """
    Load current prices keyed by uppercased symbol.

    Rows with a missing symbol or a missing, unparseable or non-positive
    price are skipped. A later row for the same symbol replaces an earlier one.

    Args:
        path: Path to the price CSV.
        symbol_column: Header of the symbol column.
        price_column: Header of the price column.

    Returns:
        Mapping of symbol to price. Empty if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Price file not found: {path}")
        return {}

    df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
    df.columns = df.columns.str.strip()

    prices: dict[str, float] = {}
    for _, row in df.iterrows():
        symbol = clean_text(row.get(symbol_column))
        price = parse_number(row.get(price_column))

        if not symbol:
            continue
        if price is None or price <= 0:
            logger.warning(f"Skipping price for {symbol}: {row.get(price_column)!r}")
            continue

        prices[symbol.upper()] = price

    logger.info(f"Loaded {len(prices)} prices from {path.name}")
    return prices
