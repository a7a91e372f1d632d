"""
NFT collection snapshot: ``/nfts/list`` then ``/nfts/{id}``, priced in USD.
"""

from typing import Iterator
from ingestion.base import SourceAdapter
from ingestion.transformers.fields import pick
from models.reference import NftCollection
from schemas.payloads import NftDetailRecord, NftRef
from schemas.snapshots import NftCollectionRow


class NftsSource(SourceAdapter):
    source_name = "nfts"
    model = NftCollection
    item_model = NftRef
    detail_model = NftDetailRecord
    item_cap = 10
    detail_delay = 1.0

    async def fetch_list(self):
        return await self.get_list("/nfts/list")

    def detail_url(self, item: NftRef) -> str:
        return self.url(f"/nfts/{item.id}")

    def extract(self, item: NftRef, detail: NftDetailRecord) -> Iterator[NftCollectionRow]:
        yield NftCollectionRow(
            id=detail.id,
            name=detail.name,
            symbol=detail.symbol,
            floor_price=pick(detail.floor_price, "usd"),
            volume_24h=pick(detail.volume_24h, "usd"),
        )
