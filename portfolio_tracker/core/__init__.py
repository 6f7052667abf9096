"""
Core functionality for the portfolio tracker.
"""
from .models import (
    AccountBreakdown,
    AverageCostMetrics,
    GroupKey,
    Holding,
    PortfolioSummary,
    Transaction,
    TransactionSummary,
    TransactionType,
)
from .config import Config, ImportConfig, load_config

__all__ = [
    "AccountBreakdown",
    "AverageCostMetrics",
    "GroupKey",
    "Holding",
    "PortfolioSummary",
    "Transaction",
    "TransactionSummary",
    "TransactionType",
    "Config",
    "ImportConfig",
    "load_config",
]
