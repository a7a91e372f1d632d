"""Exchange listings from ``/exchanges``."""

from ingestion.base import SourceAdapter
from models.markets import ExchangeInfo
from schemas.payloads import ExchangeRecord
from schemas.snapshots import ExchangeInfoRow


class ExchangesSource(SourceAdapter):
    source_name = "exchanges"
    model = ExchangeInfo
    item_model = ExchangeRecord

    async def fetch_list(self):
        return await self.get_list("/exchanges")

    def extract(self, item: ExchangeRecord, detail: ExchangeRecord):
        yield ExchangeInfoRow(
            id=item.id,
            name=item.name,
            year_established=item.year_established,
            country=item.country,
            trade_volume_24h_btc=item.trade_volume_24h_btc,
            trust_score=item.trust_score,
        )
