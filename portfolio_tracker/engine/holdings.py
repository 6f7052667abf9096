"""
Holdings calculation entry points.

Groups a flat transaction list by (account, symbol), replays each group
and returns only the positions still held.
"""
import logging
from typing import Iterable, Mapping, Optional

from portfolio_tracker.core.models import Holding, Transaction
from portfolio_tracker.engine.grouping import group_transactions
from portfolio_tracker.engine.replay import calculate_position


logger = logging.getLogger(__name__)


PriceMap = Mapping[str, float]


def calculate_holdings(
    transactions: Iterable[Transaction],
    price_map: Optional[PriceMap] = None,
) -> list[Holding]:
    """
    Calculate current holdings using the average cost basis method.

    Args:
        transactions: All transactions, in any order.
        price_map: Optional mapping of symbol to current price. Symbols
            missing from the map get no market value.

    Returns:
        One Holding per (account, symbol) group with a positive quantity,
        in the order each group was first seen. Closed positions are
        left out.
    """
    groups = group_transactions(transactions)
    prices = price_map or {}

    holdings: list[Holding] = []
    for key, group in groups.items():
        holding = calculate_position(
            group, key.account_id, key.symbol, prices.get(key.symbol)
        )
        if holding.quantity > 0:
            holdings.append(holding)

    logger.debug(f"Calculated {len(holdings)} open holdings from {len(groups)} groups")
    return holdings


def calculate_account_holdings(
    transactions: Iterable[Transaction],
    account_id: str,
    price_map: Optional[PriceMap] = None,
) -> list[Holding]:
    """Calculate holdings for a single account."""
    return calculate_holdings(
        (tx for tx in transactions if tx.account_id == account_id), price_map
    )
