"""Data layer module for fetching market data."""

from src.data.models import Asset, AssetClass, KlineBar, StockQuote, classify

__all__ = [
    "Asset",
    "AssetClass",
    "KlineBar",
    "StockQuote",
    "classify",
]
