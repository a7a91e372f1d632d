"""
Public company treasury holdings for one coin.

``/companies/public_treasury/{coin_id}`` wraps the holdings in a
``companies`` array; the coin queried is recorded on every row.
"""

from typing import Optional
from ingestion.base import SourceAdapter
from core.config import settings
from models.reference import PublicTreasuryHolding
from schemas.payloads import CompanyRecord, TreasuryEnvelope
from schemas.snapshots import TreasuryHoldingRow


class CompaniesSource(SourceAdapter):
    source_name = "companies"
    model = PublicTreasuryHolding
    item_model = CompanyRecord

    def __init__(self, client, coin_id: Optional[str] = None, **kwargs):
        super().__init__(client, **kwargs)
        self.coin_id = coin_id or settings.TREASURY_COIN_ID

    async def fetch_list(self):
        url = self.url(f"/companies/public_treasury/{self.coin_id}")
        payload = await self.client.get_json(url)
        return self.decode(TreasuryEnvelope, payload, url).companies

    def item_label(self, item: CompanyRecord) -> str:
        return item.name

    def extract(self, item: CompanyRecord, detail: CompanyRecord):
        yield TreasuryHoldingRow(
            company_name=item.name,
            symbol=item.symbol,
            coin_id=self.coin_id,
            total_holdings=item.total_holdings,
            total_value_usd=item.total_value_usd,
            percentage_of_supply=item.percentage_of_supply,
        )
