from sqlalchemy import Column, String, Text, Integer, Numeric, Date
from models.base import Base, SnapshotMixin, TextList


class CoinDetail(SnapshotMixin, Base):
    """
    Coin metadata resolved from the per-coin detail endpoint.

    One row per listed coin per run (coins.detail).
    """
    __tablename__ = "detail"
    __table_args__ = {"schema": "coins"}

    id = Column(String(255), nullable=False, index=True)
    symbol = Column(Text, nullable=True)
    name = Column(Text, nullable=True)
    hashing_algorithm = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    homepage = Column(TextList, nullable=True)
    genesis_date = Column(Date, nullable=True)
    market_cap_rank = Column(Integer, nullable=True)


class TokenContract(SnapshotMixin, Base):
    """
    Contract address of a coin on one asset platform.

    A coin deployed on N platforms yields N rows per run; platforms with an
    empty address yield none (contract.token_info).
    """
    __tablename__ = "token_info"
    __table_args__ = {"schema": "contract"}

    coin_id = Column(String(255), nullable=False, index=True)
    platform = Column(String(255), nullable=False)
    contract_address = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=True)
    symbol = Column(Text, nullable=True)
    decimals = Column(Integer, nullable=True)


class TrendingCoin(SnapshotMixin, Base):
    """Trending search result (search.trending_coins)."""
    __tablename__ = "trending_coins"
    __table_args__ = {"schema": "search"}

    id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=True)
    symbol = Column(Text, nullable=True)
    market_cap_rank = Column(Integer, nullable=True)
    score = Column(Integer, nullable=True)


class CurrentPrice(SnapshotMixin, Base):
    """
    Simple price quote for one coin in one quote currency.

    One row per (coin, vs_currency) per run (simple.current_price).
    """
    __tablename__ = "current_price"
    __table_args__ = {"schema": "simple"}

    id = Column(String(255), nullable=False, index=True)
    vs_currency = Column(String(20), nullable=False)
    price = Column(Numeric, nullable=True)
    market_cap = Column(Numeric, nullable=True)
    volume_24h = Column(Numeric, nullable=True)
    change_24h = Column(Numeric, nullable=True)
