#!/usr/bin/env python3
"""
Holdings Report Script

Loads transaction CSVs and an optional price file, then prints current
holdings and a portfolio summary using the average cost basis method.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from portfolio_tracker.core.config import ImportConfig, load_config  # noqa: E402
from portfolio_tracker.engine import (  # noqa: E402
    calculate_account_holdings,
    calculate_holdings,
    calculate_portfolio_summary,
)
from portfolio_tracker.loaders import TransactionCsvLoader, load_price_map  # noqa: E402
from portfolio_tracker.utils.reports import (  # noqa: E402
    export_holdings_csv,
    holdings_to_dataframe,
    holdings_to_markdown,
)

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Show current holdings and portfolio summary")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory of transaction CSV files (overrides config)",
    )
    parser.add_argument(
        "--prices",
        type=Path,
        help="CSV of Symbol,Price rows (overrides config)",
    )
    parser.add_argument(
        "--account",
        help="Only show holdings for this account",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Export holdings to this CSV file",
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Print holdings as a markdown table",
    )
    args = parser.parse_args()

    data_dir = args.data_dir
    prices_path = args.prices
    file_pattern = "*.csv"
    default_account_id = None
    import_config = ImportConfig()

    if args.config.exists():
        config = load_config(args.config)
        data_dir = data_dir or config.data.transactions_path
        prices_path = prices_path or config.data.prices_path
        file_pattern = config.data.file_pattern
        default_account_id = config.data.default_account_id
        import_config = config.importing
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%H:%M:%S",
        )
        logger.warning(f"Config file not found: {args.config}, using defaults")

    if data_dir is None:
        parser.error("--data-dir is required when no config file is available")

    loader = TransactionCsvLoader(
        data_dir,
        file_pattern=file_pattern,
        default_account_id=default_account_id,
        validation=import_config,
    )
    transactions = loader.load()
    prices = load_price_map(prices_path) if prices_path else {}

    if args.account:
        holdings = calculate_account_holdings(transactions, args.account, prices)
    else:
        holdings = calculate_holdings(transactions, prices)

    if args.markdown:
        print(holdings_to_markdown(holdings))
    else:
        df = holdings_to_dataframe(holdings)
        print("No holdings found." if df.empty else df.to_string(index=False))

    print()
    print(calculate_portfolio_summary(holdings))

    if args.output:
        export_holdings_csv(holdings, args.output)


if __name__ == "__main__":
    main()
