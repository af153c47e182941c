"""Data models for market data."""

from src.data.models.asset import ASSET_DB, Asset, AssetClass, classify
from src.data.models.stock import KlineBar, KlineType, StockQuote

__all__ = [
    "ASSET_DB",
    "Asset",
    "AssetClass",
    "classify",
    "KlineBar",
    "KlineType",
    "StockQuote",
]
