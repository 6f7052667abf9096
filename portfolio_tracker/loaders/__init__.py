"""
Loaders for transaction and price files.
"""
from .base import BaseLoader
from .csv_loader import TransactionCsvLoader
from .prices import load_price_map

__all__ = [
    "BaseLoader",
    "TransactionCsvLoader",
    "load_price_map",
]
