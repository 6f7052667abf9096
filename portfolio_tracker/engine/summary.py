"""
Aggregation of holdings into a portfolio summary.
"""
from typing import Iterable

from portfolio_tracker.core.models import AccountBreakdown, Holding, PortfolioSummary


def calculate_portfolio_summary(holdings: Iterable[Holding]) -> PortfolioSummary:
    """
    Sum holdings into portfolio-wide totals with a per-account breakdown.

    Unrealized gain and total return are derived from the summed figures
    with the same formulas used for a single holding.

    Args:
        holdings: Open holdings, as returned by calculate_holdings.

    Returns:
        PortfolioSummary over all holdings.
    """
    total_market_value = 0.0
    total_cost_basis = 0.0
    total_realized_gain = 0.0
    total_dividend_income = 0.0
    holdings_count = 0
    account_breakdown: dict[str, AccountBreakdown] = {}

    for holding in holdings:
        holdings_count += 1
        total_market_value += holding.market_value
        total_cost_basis += holding.avg_cost.cost_basis
        total_realized_gain += holding.realized_gain
        total_dividend_income += holding.dividend_income

        breakdown = account_breakdown.setdefault(holding.account_id, AccountBreakdown())
        breakdown.market_value += holding.market_value
        breakdown.cost_basis += holding.avg_cost.cost_basis

    total_unrealized_gain = total_market_value - total_cost_basis
    total_unrealized_gain_percent = (
        (total_unrealized_gain / total_cost_basis) * 100 if total_cost_basis > 0 else 0.0
    )
    total_return = total_realized_gain + total_unrealized_gain + total_dividend_income
    total_invested = total_cost_basis + abs(total_realized_gain)
    total_return_percent = (total_return / total_invested) * 100 if total_invested > 0 else 0.0

    return PortfolioSummary(
        total_market_value=total_market_value,
        total_cost_basis=total_cost_basis,
        total_unrealized_gain=total_unrealized_gain,
        total_unrealized_gain_percent=total_unrealized_gain_percent,
        total_realized_gain=total_realized_gain,
        total_dividend_income=total_dividend_income,
        total_return=total_return,
        total_return_percent=total_return_percent,
        holdings_count=holdings_count,
        account_breakdown=account_breakdown,
    )
