"""
DEX pair price from DEX Screener's ``/pairs/{chain}/{pair}``.

A single configured pair is walked as a one-item list; the ``pair`` object
is the item. Older responses only carry ``pairs``, in which case the first
entry is used. No pair in the response means the item is skipped.
"""

from typing import Optional
from ingestion.base import SourceAdapter
from ingestion.transformers.fields import dig
from core.config import settings
from core.exceptions import DataFormatError
from models.markets import DexTokenPrice
from schemas.payloads import DexPairRecord
from schemas.snapshots import DexTokenPriceRow


class OnchainSource(SourceAdapter):
    source_name = "onchain"
    model = DexTokenPrice
    item_model = DexPairRecord
    item_cap = 1
    base_url_setting = "DEXSCREENER_API_URL"

    def __init__(
        self,
        client,
        chain_id: Optional[str] = None,
        pair_address: Optional[str] = None,
        **kwargs
    ):
        super().__init__(client, **kwargs)
        self.chain_id = chain_id or settings.ONCHAIN_CHAIN_ID
        self.pair_address = pair_address or settings.ONCHAIN_PAIR_ADDRESS

    async def fetch_list(self):
        url = self.url(f"/pairs/{self.chain_id}/{self.pair_address}")
        payload = await self.client.get_json(url)
        if not isinstance(payload, dict):
            raise DataFormatError(
                f"Expected a JSON object from {url}",
                context={"api_url": url, "source_name": self.source_name}
            )

        pair = payload.get("pair")
        if pair is None:
            pairs = payload.get("pairs")
            pair = pairs[0] if isinstance(pairs, list) and pairs else None
        return [pair]

    def item_label(self, item: DexPairRecord) -> str:
        return f"{self.chain_id}/{self.pair_address}"

    def extract(self, item: DexPairRecord, detail: DexPairRecord):
        yield DexTokenPriceRow(
            chain_id=item.chain_id or self.chain_id,
            pair_address=item.pair_address or self.pair_address,
            exchange=item.dex_id,
            token_address=item.base_token.address if item.base_token else None,
            price=item.price_usd,
            liquidity_usd=dig(item.liquidity, "usd"),
        )
