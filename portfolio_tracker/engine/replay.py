"""
Chronological replay of a single (account, symbol) group.

Folds a transaction history into one Holding using the average cost
basis method. All shares bought are pooled into a single cost basis;
a sale removes cost at the pooled average cost per share.

The replay is total: histories that are economically impossible (selling
before buying, selling more than is held) are computed through rather
than rejected. Callers that need strict validation must check upstream.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from portfolio_tracker.core.models import (
    AverageCostMetrics,
    Holding,
    Transaction,
    TransactionType,
)
from portfolio_tracker.engine.splits import parse_split_ratio


logger = logging.getLogger(__name__)


# Values closer to zero than this are treated as floating-point drift
QUANTITY_EPSILON = 1e-9


def _or_zero(value: Optional[float]) -> float:
    """Missing and NaN numeric fields count as zero."""
    if value is None or math.isnan(value):
        return 0.0
    return value


def _clamp(value: float) -> float:
    return 0.0 if abs(value) < QUANTITY_EPSILON else value


def sort_chronologically(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Sort transactions by ascending date.

    The sort is stable: transactions sharing a date keep their input order.
    """
    return sorted(transactions, key=lambda tx: tx.date)


def apply_initial_position_filter(transactions: list[Transaction]) -> list[Transaction]:
    """
    Drop buys already captured by an initial position.

    An initial position stands for everything held up to its date, so any
    buy dated on or before the latest initial position would be counted
    twice. Other transaction types pass through regardless of date.

    Args:
        transactions: Transactions of a single group.

    Returns:
        The group without the shadowed buys, or the input list itself if
        the group has no initial position.
    """
    latest: Optional[Transaction] = None
    for tx in transactions:
        if tx.transaction_type is not TransactionType.INITIAL_POSITION:
            continue
        # Strict comparison: the first of several same-dated positions wins
        if latest is None or tx.date > latest.date:
            latest = tx

    if latest is None:
        return transactions

    cutoff = latest.date
    filtered = [
        tx
        for tx in transactions
        if not (tx.transaction_type is TransactionType.BUY and tx.date <= cutoff)
    ]

    dropped = len(transactions) - len(filtered)
    if dropped:
        logger.debug(
            f"Initial position on {cutoff:%Y-%m-%d} for {latest.symbol} "
            f"shadows {dropped} earlier buy(s)"
        )

    return filtered


@dataclass
class PositionState:
    """Running state of the replay for one group."""

    quantity: float = 0.0
    cost_basis: float = 0.0
    realized_gain: float = 0.0
    dividend_income: float = 0.0
    currency: str = ""
    first_date: Optional[datetime] = None
    last_date: Optional[datetime] = None

    @property
    def average_cost(self) -> float:
        """Pooled cost per share, 0 when nothing is held."""
        return self.cost_basis / self.quantity if self.quantity > 0 else 0.0

    def apply(self, tx: Transaction) -> None:
        """Apply one transaction to the running state."""
        if self.first_date is None:
            self.first_date = tx.date
        self.last_date = tx.date

        if not self.currency and tx.currency:
            self.currency = tx.currency

        tx_type = tx.transaction_type

        if tx_type is TransactionType.INITIAL_POSITION:
            quantity = _or_zero(tx.quantity)
            self.quantity += quantity
            self.cost_basis += quantity * _or_zero(tx.unit_price)

        elif tx_type is TransactionType.BUY:
            quantity = _or_zero(tx.quantity)
            self.quantity += quantity
            self.cost_basis += quantity * _or_zero(tx.unit_price) + _or_zero(tx.fees)

        elif tx_type is TransactionType.SELL:
            self._sell(tx)

        elif tx_type is TransactionType.DIVIDEND:
            quantity = _or_zero(tx.quantity)
            unit_price = _or_zero(tx.unit_price)
            if quantity > 0 and unit_price > 0:
                self.dividend_income += quantity * unit_price
            else:
                self.dividend_income += _or_zero(tx.total_amount)

        elif tx_type is TransactionType.SPLIT_FORWARD:
            multiplier = parse_split_ratio(tx.split_ratio)
            if multiplier != 1:
                # Cost basis is unchanged; only the share count moves
                self.quantity *= multiplier

        elif tx_type is TransactionType.SPLIT_REVERSE:
            self._reverse_split(tx)

    def _sell(self, tx: Transaction) -> None:
        sell_quantity = _or_zero(tx.quantity)
        sell_price = _or_zero(tx.unit_price)
        cost_of_sold = self.average_cost * sell_quantity

        self.realized_gain += sell_price * sell_quantity - cost_of_sold - _or_zero(tx.fees)
        self.quantity -= sell_quantity
        self.cost_basis -= cost_of_sold

    def _reverse_split(self, tx: Transaction) -> None:
        multiplier = parse_split_ratio(tx.split_ratio)
        if multiplier == 1:
            return

        old_quantity = self.quantity
        new_quantity = float(math.floor(old_quantity * multiplier))

        # Old shares that do not make up a whole new share
        not_converted = old_quantity - new_quantity / multiplier
        fractional_cost = (
            (not_converted / old_quantity) * self.cost_basis if old_quantity > 0 else 0.0
        )

        self.quantity = new_quantity
        self.cost_basis -= fractional_cost

        cash_in_lieu = _or_zero(tx.cash_in_lieu)
        if not_converted > 0 and cash_in_lieu > 0:
            self.realized_gain += cash_in_lieu - fractional_cost


def calculate_position(
    transactions: list[Transaction],
    account_id: str,
    symbol: str,
    current_price: Optional[float] = None,
) -> Holding:
    """
    Replay one group's transactions into a Holding.

    Args:
        transactions: Transactions of a single (account, symbol) group,
            in any order.
        account_id: Account the group belongs to.
        symbol: Symbol the group belongs to.
        current_price: Latest price, or None if no price is available.

    Returns:
        Holding for the group. The quantity may be zero or negative; the
        caller decides whether to keep it.
    """
    state = PositionState()
    for tx in sort_chronologically(apply_initial_position_filter(transactions)):
        state.apply(tx)

    quantity = _clamp(state.quantity)
    cost_basis = _clamp(state.cost_basis)

    has_price = current_price is not None
    cost_per_share = cost_basis / quantity if quantity > 0 else 0.0
    market_value = quantity * current_price if has_price else 0.0
    unrealized_gain = market_value - cost_basis if has_price else 0.0
    unrealized_gain_percent = (
        (unrealized_gain / cost_basis) * 100 if has_price and cost_basis > 0 else 0.0
    )

    total_return = state.realized_gain + unrealized_gain + state.dividend_income
    total_invested = cost_basis + abs(state.realized_gain)
    total_return_percent = (total_return / total_invested) * 100 if total_invested > 0 else 0.0

    logger.debug(
        f"{account_id}/{symbol}: {len(transactions)} transactions -> "
        f"quantity {quantity}, cost basis {cost_basis}"
    )

    return Holding(
        account_id=account_id,
        symbol=symbol,
        currency=state.currency,
        quantity=quantity,
        avg_cost=AverageCostMetrics(
            cost_basis=cost_basis,
            cost_per_share=cost_per_share,
            unrealized_gain=unrealized_gain,
            unrealized_gain_percent=unrealized_gain_percent,
        ),
        market_value=market_value,
        current_price=current_price,
        realized_gain=state.realized_gain,
        dividend_income=state.dividend_income,
        total_return=total_return,
        total_return_percent=total_return_percent,
        first_transaction_date=state.first_date,
        last_transaction_date=state.last_date,
    )
