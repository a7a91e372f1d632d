"""
Pydantic models of upstream payloads (list entries and detail records).

These describe structure only. Scalar numeric leaves are typed ``Any`` on
purpose: a malformed number must not reject the whole record, it is
coerced field by field when the snapshot row is built. Structural
mismatches (a missing identifier, a map that is not a map) do fail
validation, which the walker turns into a skipped item.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class Payload(BaseModel):
    """Base for upstream shapes; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


# ============================================================================
# CoinGecko: coins
# ============================================================================

class CoinRef(Payload):
    """Entry of ``/coins/list``."""
    id: str = Field(..., min_length=1)
    symbol: Optional[str] = None
    name: Optional[str] = None


class CoinDescription(Payload):
    en: Optional[str] = None


class CoinLinks(Payload):
    homepage: Optional[List[Optional[str]]] = None


class CoinDetailRecord(Payload):
    """``/coins/{id}`` as used by the coin catalog snapshot."""
    id: str = Field(..., min_length=1)
    symbol: Optional[str] = None
    name: Optional[str] = None
    hashing_algorithm: Optional[str] = None
    description: Optional[CoinDescription] = None
    links: Optional[CoinLinks] = None
    genesis_date: Optional[str] = None
    market_cap_rank: Any = None


class DetailPlatform(Payload):
    decimal_place: Any = None
    contract_address: Optional[str] = None


class CoinPlatformsRecord(Payload):
    """``/coins/{id}`` as used by the contract address snapshot."""
    name: Optional[str] = None
    symbol: Optional[str] = None
    platforms: Dict[str, Optional[str]]
    detail_platforms: Optional[Dict[str, Optional[DetailPlatform]]] = None
    decimals: Any = None


# ============================================================================
# CoinGecko: NFTs
# ============================================================================

class NftRef(Payload):
    """Entry of ``/nfts/list``."""
    id: str = Field(..., min_length=1)


class NftDetailRecord(Payload):
    """``/nfts/{id}``; price maps are keyed by currency."""
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    symbol: Optional[str] = None
    floor_price: Optional[Dict[str, Any]] = None
    volume_24h: Optional[Dict[str, Any]] = None


# ============================================================================
# CoinGecko: single-call listings
# ============================================================================

class CategoryRecord(Payload):
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    market_cap: Any = None
    volume_24h: Any = None


class CompanyRecord(Payload):
    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    total_holdings: Any = None
    total_value_usd: Any = Field(
        None, validation_alias=AliasChoices("total_value_usd", "total_current_value_usd")
    )
    percentage_of_supply: Any = Field(
        None, validation_alias=AliasChoices("percentage_of_supply", "percentage_of_total_supply")
    )


class TreasuryEnvelope(Payload):
    companies: List[Any]


class DerivativeRecord(Payload):
    """Entry of ``/derivatives``; tickers without an ``id`` are skipped."""
    id: str = Field(..., min_length=1)
    symbol: Optional[str] = None
    index_id: Optional[str] = None
    price: Any = None
    contract_type: Optional[str] = None


class ExchangeRecord(Payload):
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    year_established: Any = None
    country: Optional[str] = None
    trade_volume_24h_btc: Any = None
    trust_score: Any = None


class PlatformRecord(Payload):
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    chain_identifier: Any = None
    shortname: Optional[str] = None


class GlobalRecord(Payload):
    """``data`` object of ``/global``; maps keyed by currency or coin symbol."""
    active_cryptocurrencies: Any = None
    upcoming_icos: Any = None
    ongoing_icos: Any = None
    ended_icos: Any = None
    markets: Any = None
    total_market_cap: Optional[Dict[str, Any]] = None
    total_volume: Optional[Dict[str, Any]] = None
    market_cap_percentage: Optional[Dict[str, Any]] = None


class GlobalEnvelope(Payload):
    data: Dict[str, Any]


class TrendingCoinRecord(Payload):
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    symbol: Optional[str] = None
    market_cap_rank: Any = None
    score: Any = None


class TrendingEntry(Payload):
    """Element of ``coins`` in ``/search/trending``."""
    item: TrendingCoinRecord


class TrendingEnvelope(Payload):
    coins: List[Any]


class PriceQuotes(Payload):
    """
    Quotes for one requested coin from ``/simple/price``.

    ``quotes`` is None when the response has no entry for the coin.
    """
    coin_id: str = Field(..., min_length=1)
    quotes: Optional[Dict[str, Any]] = None


# ============================================================================
# DEX Screener
# ============================================================================

class DexToken(Payload):
    address: Optional[str] = None


class DexPairRecord(Payload):
    """``pair`` object of ``/pairs/{chain}/{pair}``."""
    chain_id: Optional[str] = Field(None, validation_alias=AliasChoices("chainId", "chain_id"))
    pair_address: Optional[str] = Field(None, validation_alias=AliasChoices("pairAddress", "pair_address"))
    dex_id: Optional[str] = Field(None, validation_alias=AliasChoices("dexId", "dex_id"))
    base_token: Optional[DexToken] = Field(None, validation_alias=AliasChoices("baseToken", "base_token"))
    price_usd: Any = Field(None, validation_alias=AliasChoices("priceUsd", "price_usd"))
    liquidity: Optional[Dict[str, Any]] = None
