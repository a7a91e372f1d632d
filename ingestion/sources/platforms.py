"""Asset platforms (chains) from ``/asset_platforms``."""

from ingestion.base import SourceAdapter
from models.reference import AssetPlatform
from schemas.payloads import PlatformRecord
from schemas.snapshots import AssetPlatformRow


class PlatformsSource(SourceAdapter):
    source_name = "platforms"
    model = AssetPlatform
    item_model = PlatformRecord

    async def fetch_list(self):
        return await self.get_list("/asset_platforms")

    def extract(self, item: PlatformRecord, detail: PlatformRecord):
        yield AssetPlatformRow(
            id=item.id,
            name=item.name,
            chain_identifier=item.chain_identifier,
            shortname=item.shortname,
        )
