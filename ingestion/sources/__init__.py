"""
Registry of snapshot sources.

Usage:
    from ingestion.sources import SOURCES, build_adapter

    adapter = build_adapter("coins", client)
    result = await ETLRunner(writer).run(adapter)
"""

from typing import Dict, Type

from core.config import settings
from ingestion.base import SourceAdapter
from ingestion.extractors.api_client import MarketDataClient
from ingestion.sources.categories import CategoriesSource
from ingestion.sources.coins import CoinsSource
from ingestion.sources.companies import CompaniesSource
from ingestion.sources.contracts import ContractsSource
from ingestion.sources.derivatives import DerivativesSource
from ingestion.sources.exchanges import ExchangesSource
from ingestion.sources.global_market import GlobalSource
from ingestion.sources.nfts import NftsSource
from ingestion.sources.onchain import OnchainSource
from ingestion.sources.platforms import PlatformsSource
from ingestion.sources.price import PriceSource
from ingestion.sources.trending import TrendingSource

SOURCES: Dict[str, Type[SourceAdapter]] = {
    cls.source_name: cls
    for cls in (
        CoinsSource,
        ContractsSource,
        NftsSource,
        CategoriesSource,
        CompaniesSource,
        DerivativesSource,
        ExchangesSource,
        PlatformsSource,
        GlobalSource,
        TrendingSource,
        PriceSource,
        OnchainSource,
    )
}


def _configured_limits(name: str) -> dict:
    """Caps and delays overridable through settings."""
    return {
        "coins": {"item_cap": settings.COINS_ITEM_CAP},
        "contracts": {
            "item_cap": settings.CONTRACTS_ITEM_CAP,
            "detail_delay": settings.CONTRACTS_DETAIL_DELAY,
        },
        "nfts": {
            "item_cap": settings.NFTS_ITEM_CAP,
            "detail_delay": settings.NFTS_DETAIL_DELAY,
        },
    }.get(name, {})


def build_adapter(name: str, client: MarketDataClient, **kwargs) -> SourceAdapter:
    """
    Instantiate a registered source.

    Raises:
        KeyError: If ``name`` is not a registered source
    """
    try:
        cls = SOURCES[name]
    except KeyError:
        raise KeyError(f"Unknown source '{name}'. Available: {', '.join(SOURCES)}")

    options = {**_configured_limits(name), **kwargs}
    return cls(client, **options)


__all__ = ["SOURCES", "build_adapter"]
