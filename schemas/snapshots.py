"""
Pydantic schemas for normalized snapshot rows with field-level coercion.

One class per target relation. Field names match column names, so a row
dumps straight into an INSERT. Numeric and date fields run the coercion
functions before validation: a value that cannot be represented becomes
None instead of failing the row. Only the identifying text fields are
required.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from ingestion.transformers.coercion import to_bigint, to_date, to_decimal, to_int
from ingestion.transformers.fields import clean_string_list

OptionalDecimal = Annotated[Optional[Decimal], BeforeValidator(to_decimal)]
OptionalInt = Annotated[Optional[int], BeforeValidator(to_int)]
OptionalBigInt = Annotated[Optional[int], BeforeValidator(to_bigint)]
OptionalDate = Annotated[Optional[date], BeforeValidator(to_date)]
OptionalTextList = Annotated[Optional[List[str]], BeforeValidator(clean_string_list)]

Identifier = Annotated[str, Field(min_length=1, max_length=255)]


class SnapshotRow(BaseModel):
    """Base for rows; the sink adds the fetch timestamp."""

    model_config = ConfigDict(extra="forbid")

    def to_values(self) -> dict:
        return self.model_dump()


class CoinDetailRow(SnapshotRow):
    id: Identifier
    symbol: Optional[str] = None
    name: Optional[str] = None
    hashing_algorithm: Optional[str] = None
    description: Optional[str] = None
    homepage: OptionalTextList = None
    genesis_date: OptionalDate = None
    market_cap_rank: OptionalInt = None


class TokenContractRow(SnapshotRow):
    coin_id: Identifier
    platform: Identifier
    contract_address: Identifier
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: OptionalInt = None

    @field_validator("contract_address")
    @classmethod
    def clean_address(cls, v):
        """Strip whitespace around the address"""
        v = v.strip()
        if not v:
            raise ValueError("contract_address cannot be empty after stripping")
        return v


class NftCollectionRow(SnapshotRow):
    id: Identifier
    name: Optional[str] = None
    symbol: Optional[str] = None
    floor_price: OptionalDecimal = None
    volume_24h: OptionalDecimal = None


class CategoryMarketRow(SnapshotRow):
    category_id: Identifier
    name: Optional[str] = None
    market_cap: OptionalDecimal = None
    volume_24h: OptionalDecimal = None


class TreasuryHoldingRow(SnapshotRow):
    company_name: Identifier
    symbol: Identifier
    coin_id: Identifier
    total_holdings: OptionalDecimal = None
    total_value_usd: OptionalDecimal = None
    percentage_of_supply: OptionalDecimal = None


class DerivativeMarketRow(SnapshotRow):
    id: Identifier
    symbol: Optional[str] = None
    index_id: Optional[str] = None
    price: OptionalDecimal = None
    contract_type: Optional[str] = None


class ExchangeInfoRow(SnapshotRow):
    id: Identifier
    name: Optional[str] = None
    year_established: OptionalInt = None
    country: Optional[str] = None
    trade_volume_24h_btc: OptionalDecimal = None
    trust_score: OptionalInt = None


class AssetPlatformRow(SnapshotRow):
    id: Identifier
    name: Optional[str] = None
    chain_identifier: OptionalBigInt = None
    shortname: Optional[str] = None


class GlobalMarketRow(SnapshotRow):
    active_cryptocurrencies: OptionalInt = None
    upcoming_icos: OptionalInt = None
    ongoing_icos: OptionalInt = None
    ended_icos: OptionalInt = None
    markets: OptionalInt = None
    total_market_cap_usd: OptionalDecimal = None
    total_volume_usd: OptionalDecimal = None
    btc_dominance: OptionalDecimal = None
    eth_dominance: OptionalDecimal = None


class TrendingCoinRow(SnapshotRow):
    id: Identifier
    name: Optional[str] = None
    symbol: Optional[str] = None
    market_cap_rank: OptionalInt = None
    score: OptionalInt = None


class CurrentPriceRow(SnapshotRow):
    id: Identifier
    vs_currency: Annotated[str, Field(min_length=1, max_length=20)]
    price: OptionalDecimal = None
    market_cap: OptionalDecimal = None
    volume_24h: OptionalDecimal = None
    change_24h: OptionalDecimal = None


class DexTokenPriceRow(SnapshotRow):
    chain_id: Identifier
    pair_address: Identifier
    exchange: Optional[str] = None
    token_address: Optional[str] = None
    price: OptionalDecimal = None
    liquidity_usd: OptionalDecimal = None
