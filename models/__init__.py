"""
SQLAlchemy ORM models for the snapshot relations.

Every model is an append-only time series: one row per item (or per item
sub-key) per fetch cycle, stamped with the insertion time. Models live in
PostgreSQL schemas named after their source, e.g. ``coins.detail`` or
``simple.current_price``.

Models:
    base: Declarative base, shared column types and SnapshotMixin
    coins: CoinDetail, TokenContract, TrendingCoin, CurrentPrice
    markets: CategoryMarketData, DerivativeMarket, ExchangeInfo,
             GlobalMarketStats, DexTokenPrice
    reference: AssetPlatform, NftCollection, PublicTreasuryHolding

Usage:
    from models import CoinDetail, SNAPSHOT_SCHEMAS
    from models.base import Base
"""

from models.base import Base, SnapshotMixin
from models.coins import CoinDetail, TokenContract, TrendingCoin, CurrentPrice
from models.markets import (
    CategoryMarketData,
    DerivativeMarket,
    ExchangeInfo,
    GlobalMarketStats,
    DexTokenPrice,
)
from models.reference import AssetPlatform, NftCollection, PublicTreasuryHolding

# PostgreSQL schemas that must exist before create_all
SNAPSHOT_SCHEMAS = sorted({
    table.schema for table in Base.metadata.tables.values() if table.schema
})

__all__ = [
    "Base",
    "SnapshotMixin",
    "SNAPSHOT_SCHEMAS",
    "CoinDetail",
    "TokenContract",
    "TrendingCoin",
    "CurrentPrice",
    "CategoryMarketData",
    "DerivativeMarket",
    "ExchangeInfo",
    "GlobalMarketStats",
    "DexTokenPrice",
    "AssetPlatform",
    "NftCollection",
    "PublicTreasuryHolding",
]
