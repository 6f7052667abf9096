"""
Partitioning of transactions into (account, symbol) groups.
"""
from collections import defaultdict
from typing import Iterable

from portfolio_tracker.core.models import GroupKey, Transaction


def group_transactions(
    transactions: Iterable[Transaction],
) -> dict[GroupKey, list[Transaction]]:
    """
    Group transactions by account and symbol.

    Input order is preserved within each group, and groups appear in the
    order their first transaction was seen.

    Args:
        transactions: Flat sequence of transactions.

    Returns:
        Mapping of GroupKey to that group's transactions.
    """
    groups: dict[GroupKey, list[Transaction]] = defaultdict(list)
    for tx in transactions:
        groups[tx.key].append(tx)
    return dict(groups)
