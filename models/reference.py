from sqlalchemy import Column, String, Text, BigInteger, Numeric
from models.base import Base, SnapshotMixin


class AssetPlatform(SnapshotMixin, Base):
    """Chain / asset platform catalog entry (asset_platforms.platforms)."""
    __tablename__ = "platforms"
    __table_args__ = {"schema": "asset_platforms"}

    id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=True)
    chain_identifier = Column(BigInteger, nullable=True)
    shortname = Column(Text, nullable=True)


class NftCollection(SnapshotMixin, Base):
    """
    NFT collection with USD floor price and 24h volume (nfts.collections).
    """
    __tablename__ = "collections"
    __table_args__ = {"schema": "nfts"}

    id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=True)
    symbol = Column(Text, nullable=True)
    floor_price = Column(Numeric, nullable=True)
    volume_24h = Column(Numeric, nullable=True)


class PublicTreasuryHolding(SnapshotMixin, Base):
    """
    Public company treasury holdings of one coin (companies.public_holdings).
    """
    __tablename__ = "public_holdings"
    __table_args__ = {"schema": "companies"}

    company_name = Column(String(255), nullable=False, index=True)
    symbol = Column(String(255), nullable=False)
    coin_id = Column(String(255), nullable=False)
    total_holdings = Column(Numeric, nullable=True)
    total_value_usd = Column(Numeric, nullable=True)
    percentage_of_supply = Column(Numeric, nullable=True)
