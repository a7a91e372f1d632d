"""
Coin catalog snapshot: ``/coins/list`` then ``/coins/{id}`` per coin.
"""

from typing import Iterator
from ingestion.base import SourceAdapter
from models.coins import CoinDetail
from schemas.payloads import CoinDetailRecord, CoinRef
from schemas.snapshots import CoinDetailRow


class CoinsSource(SourceAdapter):
    source_name = "coins"
    model = CoinDetail
    item_model = CoinRef
    detail_model = CoinDetailRecord
    item_cap = 100

    async def fetch_list(self):
        return await self.get_list("/coins/list")

    def detail_url(self, item: CoinRef) -> str:
        return self.url(f"/coins/{item.id}")

    def extract(self, item: CoinRef, detail: CoinDetailRecord) -> Iterator[CoinDetailRow]:
        yield CoinDetailRow(
            id=detail.id,
            symbol=detail.symbol,
            name=detail.name,
            hashing_algorithm=detail.hashing_algorithm,
            description=detail.description.en if detail.description else None,
            homepage=detail.links.homepage if detail.links else None,
            genesis_date=detail.genesis_date,
            market_cap_rank=detail.market_cap_rank,
        )
