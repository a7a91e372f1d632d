"""
Token contract snapshot: one row per (coin, platform) with a contract address.

Coins come from ``/coins/list?include_platform=true``; names, symbols and
addresses come from each coin's detail record.
"""

from typing import Iterator
from ingestion.base import SourceAdapter
from ingestion.transformers.fields import non_empty_entries
from models.coins import TokenContract
from schemas.payloads import CoinPlatformsRecord, CoinRef
from schemas.snapshots import TokenContractRow


class ContractsSource(SourceAdapter):
    source_name = "contracts"
    model = TokenContract
    item_model = CoinRef
    detail_model = CoinPlatformsRecord
    item_cap = 100
    detail_delay = 1.5

    async def fetch_list(self):
        return await self.get_list("/coins/list", params={"include_platform": "true"})

    def detail_url(self, item: CoinRef) -> str:
        return self.url(f"/coins/{item.id}")

    def extract(self, item: CoinRef, detail: CoinPlatformsRecord) -> Iterator[TokenContractRow]:
        detail_platforms = detail.detail_platforms or {}

        for platform, address in non_empty_entries(detail.platforms):
            address = address.strip()
            if not address:
                continue

            # Per-platform decimals win over the coin-level value
            platform_info = detail_platforms.get(platform)
            decimals = platform_info.decimal_place if platform_info else None
            if decimals is None:
                decimals = detail.decimals

            yield TokenContractRow(
                coin_id=item.id,
                platform=platform,
                contract_address=address,
                name=detail.name,
                symbol=detail.symbol,
                decimals=decimals,
            )
