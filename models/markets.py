from sqlalchemy import Column, String, Text, Integer, Numeric, DateTime
from models.base import Base, SnapshotMixin, SnapshotId, utc_now


class CategoryMarketData(Base):
    """
    Market aggregates per coin category (categories.category_market_data).

    This relation has always been stamped in ``updated_at`` rather than
    ``fetched_at``; the semantics are the same.
    """
    __tablename__ = "category_market_data"
    __table_args__ = {"schema": "categories"}
    __stamp_column__ = "updated_at"

    snapshot_id = Column(SnapshotId, primary_key=True, autoincrement=True)
    category_id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=True)
    market_cap = Column(Numeric, nullable=True)
    volume_24h = Column(Numeric, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)


class DerivativeMarket(SnapshotMixin, Base):
    """Derivative ticker (derivatives.derivative_markets)."""
    __tablename__ = "derivative_markets"
    __table_args__ = {"schema": "derivatives"}

    id = Column(String(255), nullable=False, index=True)
    symbol = Column(Text, nullable=True)
    index_id = Column(Text, nullable=True)
    price = Column(Numeric, nullable=True)
    contract_type = Column(Text, nullable=True)


class ExchangeInfo(SnapshotMixin, Base):
    """Exchange listing (exchanges.exchange_info)."""
    __tablename__ = "exchange_info"
    __table_args__ = {"schema": "exchanges"}

    id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=True)
    year_established = Column(Integer, nullable=True)
    country = Column(Text, nullable=True)
    trade_volume_24h_btc = Column(Numeric, nullable=True)
    trust_score = Column(Integer, nullable=True)


class GlobalMarketStats(SnapshotMixin, Base):
    """
    Whole-market aggregates (global.market_stats).

    Exactly one row per run.
    """
    __tablename__ = "market_stats"
    __table_args__ = {"schema": "global"}

    active_cryptocurrencies = Column(Integer, nullable=True)
    upcoming_icos = Column(Integer, nullable=True)
    ongoing_icos = Column(Integer, nullable=True)
    ended_icos = Column(Integer, nullable=True)
    markets = Column(Integer, nullable=True)
    total_market_cap_usd = Column(Numeric, nullable=True)
    total_volume_usd = Column(Numeric, nullable=True)
    btc_dominance = Column(Numeric, nullable=True)
    eth_dominance = Column(Numeric, nullable=True)


class DexTokenPrice(SnapshotMixin, Base):
    """Price and liquidity of a single DEX pair (onchain.dex_token_prices)."""
    __tablename__ = "dex_token_prices"
    __table_args__ = {"schema": "onchain"}

    chain_id = Column(String(255), nullable=False)
    pair_address = Column(String(255), nullable=False, index=True)
    exchange = Column(Text, nullable=True)
    token_address = Column(Text, nullable=True)
    price = Column(Numeric, nullable=True)
    liquidity_usd = Column(Numeric, nullable=True)
