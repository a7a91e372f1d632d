"""Trending coins from ``/search/trending`` (``coins[].item``)."""

from ingestion.base import SourceAdapter
from models.coins import TrendingCoin
from schemas.payloads import TrendingEntry, TrendingEnvelope
from schemas.snapshots import TrendingCoinRow


class TrendingSource(SourceAdapter):
    source_name = "search"
    model = TrendingCoin
    item_model = TrendingEntry

    async def fetch_list(self):
        url = self.url("/search/trending")
        payload = await self.client.get_json(url)
        return self.decode(TrendingEnvelope, payload, url).coins

    def item_label(self, item: TrendingEntry) -> str:
        return item.item.id

    def extract(self, item: TrendingEntry, detail: TrendingEntry):
        coin = item.item
        yield TrendingCoinRow(
            id=coin.id,
            name=coin.name,
            symbol=coin.symbol,
            market_cap_rank=coin.market_cap_rank,
            score=coin.score,
        )
