"""
Abstract base class for snapshot sources
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Type
from pydantic import BaseModel, ValidationError
from core.config import settings
from core.exceptions import DataFormatError
from ingestion.extractors.api_client import MarketDataClient
from ingestion.walker import ItemWalker, Sleep
from schemas.snapshots import SnapshotRow
import asyncio
import logging

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """
    Abstract base class for all snapshot sources.

    A source is fully described by:
    - where its list comes from (``fetch_list``)
    - how a list entry is shaped (``item_model``)
    - optionally, where an item's detail lives (``detail_url``, ``detail_model``)
    - how an (item, detail) pair becomes rows of ``model`` (``extract``)

    Everything else (pacing, skipping, writing) is shared.
    """

    source_name: str
    model: Type
    item_model: Type[BaseModel]
    detail_model: Optional[Type[BaseModel]] = None
    item_cap: Optional[int] = None
    detail_delay: float = 0.0

    # Settings attribute holding this source's base URL
    base_url_setting: str = "COINGECKO_API_URL"

    def __init__(
        self,
        client: MarketDataClient,
        base_url: Optional[str] = None,
        item_cap: Optional[int] = None,
        detail_delay: Optional[float] = None
    ):
        self.client = client
        self.base_url = (base_url or getattr(settings, self.base_url_setting)).rstrip("/")
        if item_cap is not None:
            self.item_cap = item_cap
        if detail_delay is not None:
            self.detail_delay = detail_delay

    @property
    def has_detail(self) -> bool:
        return self.detail_model is not None

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @abstractmethod
    async def fetch_list(self) -> List[Any]:
        """
        Fetch the raw list entries for one run.

        Returns:
            Raw (undecoded) entries, in upstream order

        Raises:
            ExtractionError: If the list cannot be fetched
            DataFormatError: If the payload does not have the list shape
        """
        pass

    @abstractmethod
    def extract(self, item: Any, detail: Any) -> Iterable[SnapshotRow]:
        """Build the rows for one resolved item (zero or more)."""
        pass

    def detail_url(self, item: Any) -> str:
        raise NotImplementedError(f"{self.source_name} has no detail step")

    def item_label(self, item: Any) -> str:
        return str(getattr(item, "id", None) or item)

    def parse_item(self, raw: Any) -> Any:
        return self.item_model.model_validate(raw)

    async def fetch_detail(self, item: Any) -> Any:
        url = self.detail_url(item)
        payload = await self.client.get_json(url)
        return self.decode(self.detail_model, payload, url)

    def walker(self, sleep: Sleep = asyncio.sleep) -> ItemWalker:
        """Walker configured with this source's capabilities and limits."""
        return ItemWalker(
            parse_item=self.parse_item,
            fetch_detail=self.fetch_detail if self.has_detail else None,
            item_cap=self.item_cap,
            delay=self.detail_delay,
            sleep=sleep,
            label=self.item_label,
        )

    # ------------------------------------------------------------------
    # Payload helpers
    # ------------------------------------------------------------------

    def decode(self, schema: Type[BaseModel], payload: Any, url: str) -> Any:
        """Validate ``payload`` against ``schema`` or raise DataFormatError."""
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise DataFormatError(
                f"Unexpected payload shape from {url}",
                context={
                    "api_url": url,
                    "source_name": self.source_name,
                    "field_errors": e.errors(include_url=False),
                },
                original_exception=e
            )

    async def get_list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Fetch ``path`` and require a JSON array."""
        url = self.url(path)
        payload = await self.client.get_json(url, params=params)
        if not isinstance(payload, list):
            raise DataFormatError(
                f"Expected a JSON array from {url}",
                context={
                    "api_url": url,
                    "source_name": self.source_name,
                    "payload_type": type(payload).__name__,
                }
            )
        logger.info(f"{self.source_name}: listed {len(payload)} entries")
        return payload
