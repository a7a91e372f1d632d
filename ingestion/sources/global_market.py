"""
Whole-market statistics from ``/global``.

The ``data`` object is the only item, so every run writes exactly one row.
"""

from ingestion.base import SourceAdapter
from ingestion.transformers.fields import pick
from models.markets import GlobalMarketStats
from schemas.payloads import GlobalEnvelope, GlobalRecord
from schemas.snapshots import GlobalMarketRow


class GlobalSource(SourceAdapter):
    source_name = "global"
    model = GlobalMarketStats
    item_model = GlobalRecord

    async def fetch_list(self):
        url = self.url("/global")
        payload = await self.client.get_json(url)
        return [self.decode(GlobalEnvelope, payload, url).data]

    def item_label(self, item: GlobalRecord) -> str:
        return "global"

    def extract(self, item: GlobalRecord, detail: GlobalRecord):
        yield GlobalMarketRow(
            active_cryptocurrencies=item.active_cryptocurrencies,
            upcoming_icos=item.upcoming_icos,
            ongoing_icos=item.ongoing_icos,
            ended_icos=item.ended_icos,
            markets=item.markets,
            total_market_cap_usd=pick(item.total_market_cap, "usd"),
            total_volume_usd=pick(item.total_volume, "usd"),
            btc_dominance=pick(item.market_cap_percentage, "btc"),
            eth_dominance=pick(item.market_cap_percentage, "eth"),
        )
