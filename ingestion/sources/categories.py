"""Category market aggregates from ``/coins/categories``."""

from ingestion.base import SourceAdapter
from models.markets import CategoryMarketData
from schemas.payloads import CategoryRecord
from schemas.snapshots import CategoryMarketRow


class CategoriesSource(SourceAdapter):
    source_name = "categories"
    model = CategoryMarketData
    item_model = CategoryRecord

    async def fetch_list(self):
        return await self.get_list("/coins/categories")

    def extract(self, item: CategoryRecord, detail: CategoryRecord):
        yield CategoryMarketRow(
            category_id=item.id,
            name=item.name,
            market_cap=item.market_cap,
            volume_24h=item.volume_24h,
        )
