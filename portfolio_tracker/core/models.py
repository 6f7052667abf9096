"""
Data models for the portfolio tracker.

Contains enums for categorical data and dataclasses for domain objects.
Transactions are the input to the holdings engine; Holding and
PortfolioSummary are its outputs.
"""
from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import datetime, time, timezone
from enum import Enum
from typing import NamedTuple, Optional


class TransactionType(Enum):
    """Canonical transaction types."""

    INITIAL_POSITION = "initial_position"
    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    SPLIT_FORWARD = "split_forward"
    SPLIT_REVERSE = "split_reverse"

    def __str__(self) -> str:
        return _TYPE_LABELS[self]

    @property
    def description(self) -> str:
        """Longer description of the transaction type."""
        return _TYPE_DESCRIPTIONS[self]

    @property
    def is_purchase(self) -> bool:
        """Returns True if this transaction type adds shares at a cost."""
        return self in (TransactionType.INITIAL_POSITION, TransactionType.BUY)

    @property
    def is_split(self) -> bool:
        """Returns True for forward and reverse splits."""
        return self in (TransactionType.SPLIT_FORWARD, TransactionType.SPLIT_REVERSE)

    @classmethod
    def parse(cls, value: "str | TransactionType") -> "TransactionType":
        """
        Parse a transaction type from its string value.

        Args:
            value: A TransactionType or its value (case-insensitive).

        Returns:
            The matching TransactionType.

        Raises:
            ValueError: If the value is not a known transaction type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Invalid transaction type: {value!r}. Must be: {valid}") from None


_TYPE_LABELS = {
    TransactionType.INITIAL_POSITION: "Initial Position",
    TransactionType.BUY: "Buy",
    TransactionType.SELL: "Sell",
    TransactionType.DIVIDEND: "Dividend",
    TransactionType.SPLIT_FORWARD: "Stock Split (Forward)",
    TransactionType.SPLIT_REVERSE: "Stock Split (Reverse)",
}

_TYPE_DESCRIPTIONS = {
    TransactionType.INITIAL_POSITION: "Starting position when importing existing holdings",
    TransactionType.BUY: "Purchase of securities",
    TransactionType.SELL: "Sale of securities",
    TransactionType.DIVIDEND: "Cash dividend received",
    TransactionType.SPLIT_FORWARD: "Forward stock split (e.g., 2:1 doubles shares)",
    TransactionType.SPLIT_REVERSE: "Reverse stock split (e.g., 1:2 halves shares)",
}


class GroupKey(NamedTuple):
    """Composite key identifying one position: an account and a symbol."""

    account_id: str
    symbol: str


@dataclass(frozen=True)
class Transaction:
    """
    Represents a single investment transaction.

    Only structural problems (missing account or symbol, unknown type,
    non-date date) are rejected here. Economic values such as negative
    quantities are accepted as given.
    """

    account_id: str
    symbol: str
    transaction_type: TransactionType
    date: datetime
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    total_amount: Optional[float] = None
    currency: str = ""
    fees: Optional[float] = None
    split_ratio: Optional[str] = None
    cash_in_lieu: Optional[float] = None
    commission: Optional[float] = None
    mer: Optional[float] = None
    notes: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.account_id or not str(self.account_id).strip():
            raise ValueError("Transaction requires an account_id")
        if not self.symbol or not str(self.symbol).strip():
            raise ValueError("Transaction requires a symbol")

        object.__setattr__(self, "account_id", str(self.account_id).strip())
        object.__setattr__(self, "symbol", str(self.symbol).strip().upper())
        object.__setattr__(
            self, "transaction_type", TransactionType.parse(self.transaction_type)
        )
        object.__setattr__(self, "date", _normalise_date(self.date))
        object.__setattr__(self, "currency", (self.currency or "").strip().upper())

    @property
    def key(self) -> GroupKey:
        """The (account, symbol) group this transaction belongs to."""
        return GroupKey(self.account_id, self.symbol)

    @property
    def amount(self) -> float:
        """
        Gross monetary amount of the transaction.

        quantity x unit_price when both are positive, otherwise total_amount,
        otherwise 0. Fees are not included.
        """
        quantity = self.quantity or 0.0
        unit_price = self.unit_price or 0.0
        if quantity > 0 and unit_price > 0:
            return quantity * unit_price
        return self.total_amount or 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for DataFrame creation."""
        return {
            "Date": self.date.strftime("%Y-%m-%d"),
            "Account": self.account_id,
            "Symbol": self.symbol,
            "Type": str(self.transaction_type),
            "Quantity": self.quantity,
            "Unit Price": self.unit_price,
            "Total Amount": self.total_amount,
            "Currency": self.currency,
            "Fees": self.fees,
            "Split Ratio": self.split_ratio,
            "Cash In Lieu": self.cash_in_lieu,
        }


def _normalise_date(value) -> datetime:
    """Coerce a date or datetime to a naive datetime; anything else is a contract violation."""
    if isinstance(value, datetime):
        # Aware datetimes are stored as naive UTC so all dates compare
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date_type):
        return datetime.combine(value, time.min)
    raise ValueError(f"Transaction date must be a date or datetime, got {type(value).__name__}")


@dataclass
class AverageCostMetrics:
    """Average cost basis figures for a holding."""

    cost_basis: float
    cost_per_share: float
    unrealized_gain: float
    unrealized_gain_percent: float


@dataclass
class Holding:
    """Represents a current position in one symbol within one account."""

    account_id: str
    symbol: str
    currency: str
    quantity: float
    avg_cost: AverageCostMetrics
    market_value: float
    current_price: Optional[float]
    realized_gain: float
    dividend_income: float
    total_return: float
    total_return_percent: float
    first_transaction_date: Optional[datetime] = None
    last_transaction_date: Optional[datetime] = None

    @property
    def key(self) -> GroupKey:
        return GroupKey(self.account_id, self.symbol)

    def to_dict(self) -> dict:
        """Convert to dictionary for DataFrame creation."""
        return {
            "Account": self.account_id,
            "Symbol": self.symbol,
            "Currency": self.currency,
            "Quantity": self.quantity,
            "Cost Basis": self.avg_cost.cost_basis,
            "Cost/Share": self.avg_cost.cost_per_share,
            "Price": self.current_price,
            "Market Value": self.market_value,
            "Unrealized Gain": self.avg_cost.unrealized_gain,
            "Unrealized %": self.avg_cost.unrealized_gain_percent,
            "Realized Gain": self.realized_gain,
            "Dividends": self.dividend_income,
            "Total Return": self.total_return,
            "Total Return %": self.total_return_percent,
            "First Date": _format_date(self.first_transaction_date),
            "Last Date": _format_date(self.last_transaction_date),
        }


def _format_date(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value is not None else None


@dataclass
class AccountBreakdown:
    """Market value and cost basis of one account."""

    market_value: float = 0.0
    cost_basis: float = 0.0


@dataclass
class PortfolioSummary:
    """Portfolio-wide totals across all holdings."""

    total_market_value: float
    total_cost_basis: float
    total_unrealized_gain: float
    total_unrealized_gain_percent: float
    total_realized_gain: float
    total_dividend_income: float
    total_return: float
    total_return_percent: float
    holdings_count: int
    account_breakdown: dict[str, AccountBreakdown] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format the summary as a readable string."""
        lines = [
            f"Portfolio Summary ({self.holdings_count} holdings)",
            f"  Market Value:     {self.total_market_value:,.2f}",
            f"  Cost Basis:       {self.total_cost_basis:,.2f}",
            f"  Unrealized Gain:  {self.total_unrealized_gain:,.2f} "
            f"({self.total_unrealized_gain_percent:+.2f}%)",
            f"  Realized Gain:    {self.total_realized_gain:,.2f}",
            f"  Dividend Income:  {self.total_dividend_income:,.2f}",
            f"  Total Return:     {self.total_return:,.2f} ({self.total_return_percent:+.2f}%)",
        ]

        if self.account_breakdown:
            lines.append("  By Account:")
            for account_id, breakdown in sorted(self.account_breakdown.items()):
                lines.append(
                    f"    {account_id}: value {breakdown.market_value:,.2f}, "
                    f"cost {breakdown.cost_basis:,.2f}"
                )

        return "\n".join(lines)


@dataclass
class TransactionSummary:
    """Counts and totals over a set of transactions."""

    total_buys: float
    total_sells: float
    total_dividends: float
    transaction_count: int
    by_symbol: dict[str, int] = field(default_factory=dict)
    by_type: dict[TransactionType, int] = field(default_factory=dict)
