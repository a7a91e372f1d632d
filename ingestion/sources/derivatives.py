"""Derivative tickers from ``/derivatives``."""

from ingestion.base import SourceAdapter
from models.markets import DerivativeMarket
from schemas.payloads import DerivativeRecord
from schemas.snapshots import DerivativeMarketRow


class DerivativesSource(SourceAdapter):
    source_name = "derivatives"
    model = DerivativeMarket
    item_model = DerivativeRecord

    async def fetch_list(self):
        return await self.get_list("/derivatives")

    def extract(self, item: DerivativeRecord, detail: DerivativeRecord):
        yield DerivativeMarketRow(
            id=item.id,
            symbol=item.symbol,
            index_id=item.index_id,
            price=item.price,
            contract_type=item.contract_type,
        )
