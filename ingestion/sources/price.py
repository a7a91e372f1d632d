"""
Spot prices for a fixed set of coins in a fixed set of currencies.

``/simple/price`` answers with ``{coin: {"usd": ..., "usd_market_cap": ...}}``.
Each requested coin is an item. A coin present in the response yields one
row per requested currency, with NULL for any missing quote; a coin missing
from the response yields no rows.
"""

from typing import Iterator, List, Optional, Sequence
from ingestion.base import SourceAdapter
from ingestion.transformers.fields import pick
from core.config import settings
from core.exceptions import DataFormatError
from models.coins import CurrentPrice
from schemas.payloads import PriceQuotes
from schemas.snapshots import CurrentPriceRow


class PriceSource(SourceAdapter):
    source_name = "price"
    model = CurrentPrice
    item_model = PriceQuotes

    def __init__(
        self,
        client,
        coin_ids: Optional[Sequence[str]] = None,
        vs_currencies: Optional[Sequence[str]] = None,
        **kwargs
    ):
        super().__init__(client, **kwargs)
        self.coin_ids: List[str] = list(coin_ids or settings.PRICE_COIN_IDS)
        self.vs_currencies: List[str] = list(vs_currencies or settings.PRICE_VS_CURRENCIES)

    async def fetch_list(self):
        url = self.url("/simple/price")
        payload = await self.client.get_json(url, params={
            "ids": ",".join(self.coin_ids),
            "vs_currencies": ",".join(self.vs_currencies),
            "include_market_cap": "true",
            "include_24hr_vol": "true",
            "include_24hr_change": "true",
        })
        if not isinstance(payload, dict):
            raise DataFormatError(
                f"Expected a JSON object from {url}",
                context={"api_url": url, "source_name": self.source_name}
            )
        return [{"coin_id": coin_id, "quotes": payload.get(coin_id)} for coin_id in self.coin_ids]

    def item_label(self, item: PriceQuotes) -> str:
        return item.coin_id

    def extract(self, item: PriceQuotes, detail: PriceQuotes) -> Iterator[CurrentPriceRow]:
        if item.quotes is None:
            return

        for currency in self.vs_currencies:
            quotes = item.quotes
            yield CurrentPriceRow(
                id=item.coin_id,
                vs_currency=currency,
                price=pick(quotes, currency),
                market_cap=pick(quotes, f"{currency}_market_cap"),
                volume_24h=pick(quotes, f"{currency}_24h_vol"),
                change_24h=pick(quotes, f"{currency}_24h_change"),
            )
