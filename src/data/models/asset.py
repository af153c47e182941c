"""Asset classification models.

Maps ticker symbols to a descriptive asset class and subclass using a
built-in table of funds of interest. Symbols outside the table are
classified as ``Other``.
"""

from dataclasses import dataclass
from enum import Enum


class AssetClass(str, Enum):
    """Asset classes and subclasses."""

    US_STOCK = "US Stock"
    US_STOCK_LARGE = "US Stock Large"
    US_STOCK_LARGE_VALUE = "US Stock Large Value"
    US_STOCK_LARGE_GROWTH = "US Stock Large Growth"
    US_STOCK_LARGE_TECH = "US Stock Large Tech"
    US_STOCK_MID = "US Stock Mid"
    US_STOCK_SMALL = "US Stock Small"
    INTERNATIONAL_STOCK = "International Stock"
    EMERGING_MARKET_STOCK = "Emerging Market Stock"
    CHINA_STOCK = "China Stock"
    US_REAL_ESTATE = "US Real Estate"
    INTERNATIONAL_REAL_ESTATE = "International Real Estate"
    US_BOND = "US Bond"
    US_TREASURY = "US Treasury"
    US_TREASURY_LONG_TERM = "US Treasury Long Term"
    US_TREASURY_INTERMEDIATE_TERM = "US Treasury Intermediate Term"
    US_TREASURY_SHORT_TERM = "US Treasury Short Term"
    US_TREASURY_INFLATION_PROTECTED = "US Treasury Inflation Protected"
    COMMODITY = "Commodity"
    CRUDE_OIL = "Crude Oil"
    GOLD = "Gold"
    SILVER = "Silver"
    OTHER = "Other"


@dataclass(frozen=True)
class Asset:
    """A security that can be held in a portfolio."""

    symbol: str
    asset_class: AssetClass
    subclass: AssetClass


# symbol -> (class, subclass)
ASSET_DB: dict[str, tuple[AssetClass, AssetClass]] = {
    "VTI": (AssetClass.US_STOCK, AssetClass.US_STOCK_LARGE),
    "VTV": (AssetClass.US_STOCK, AssetClass.US_STOCK_LARGE_VALUE),
    "VUG": (AssetClass.US_STOCK, AssetClass.US_STOCK_LARGE_GROWTH),
    "QQQ": (AssetClass.US_STOCK, AssetClass.US_STOCK_LARGE_TECH),
    "VO": (AssetClass.US_STOCK, AssetClass.US_STOCK_MID),
    "VB": (AssetClass.US_STOCK, AssetClass.US_STOCK_SMALL),
    "VXUS": (AssetClass.INTERNATIONAL_STOCK, AssetClass.INTERNATIONAL_STOCK),
    "VWO": (AssetClass.INTERNATIONAL_STOCK, AssetClass.EMERGING_MARKET_STOCK),
    "GXC": (AssetClass.CHINA_STOCK, AssetClass.CHINA_STOCK),
    "VNQ": (AssetClass.US_REAL_ESTATE, AssetClass.US_REAL_ESTATE),
    "VNQI": (AssetClass.INTERNATIONAL_REAL_ESTATE, AssetClass.INTERNATIONAL_REAL_ESTATE),
    "BND": (AssetClass.US_BOND, AssetClass.US_BOND),
    "GOVT": (AssetClass.US_TREASURY, AssetClass.US_TREASURY),
    "VGLT": (AssetClass.US_TREASURY, AssetClass.US_TREASURY_LONG_TERM),
    "SPTI": (AssetClass.US_TREASURY, AssetClass.US_TREASURY_INTERMEDIATE_TERM),
    "SHY": (AssetClass.US_TREASURY, AssetClass.US_TREASURY_SHORT_TERM),
    "TIP": (AssetClass.US_TREASURY, AssetClass.US_TREASURY_INFLATION_PROTECTED),
    "DBC": (AssetClass.COMMODITY, AssetClass.COMMODITY),
    "USO": (AssetClass.COMMODITY, AssetClass.CRUDE_OIL),
    "IAU": (AssetClass.COMMODITY, AssetClass.GOLD),
    "SLV": (AssetClass.COMMODITY, AssetClass.SILVER),
}


def classify(symbol: str) -> Asset:
    """Classify a ticker symbol.

    Never fails: symbols missing from ASSET_DB get class and subclass
    ``AssetClass.OTHER``.

    Args:
        symbol: Ticker symbol (case-insensitive).

    Returns:
        Asset for the symbol.

    Example:
        >>> classify("vti").subclass
        <AssetClass.US_STOCK_LARGE: 'US Stock Large'>
    """
    symbol = symbol.upper()
    asset_class, subclass = ASSET_DB.get(symbol, (AssetClass.OTHER, AssetClass.OTHER))
    return Asset(symbol=symbol, asset_class=asset_class, subclass=subclass)
