"""
Rate-limited item walker.

Turns a raw list payload into a stream of ``(item, detail)`` pairs, one item
at a time and in list order. Sources differ only in the callables they plug
in: how a list entry is parsed, and (optionally) how its detail record is
fetched. Failures local to one entry are logged and counted as skips; they
never stop the walk.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Iterable, Optional, Tuple

from pydantic import ValidationError

from core.exceptions import (
    ExtractionError,
    RecordValidationError,
    TransformationError,
)

logger = logging.getLogger(__name__)

ParseItem = Callable[[Any], Any]
FetchDetail = Callable[[Any], Awaitable[Any]]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class WalkStats:
    """Counters for one walk; ``listed`` is the size after the cap."""
    listed: int = 0
    processed: int = 0
    skipped: int = 0


class ItemWalker:
    """
    Sequential walk over list entries with an optional detail step.

    Args:
        parse_item: Builds an item from a raw list entry. Raising
            ``ValidationError`` or ``TransformationError`` skips the entry.
        fetch_detail: Coroutine resolving an item to its detail record.
            None means the item is its own detail (single-call sources).
        item_cap: Maximum number of raw entries considered, or None.
        delay: Seconds to wait before each detail fetch after the first.
        sleep: Awaitable used for the wait; tests pass a recorder.
    """

    def __init__(
        self,
        parse_item: ParseItem,
        fetch_detail: Optional[FetchDetail] = None,
        item_cap: Optional[int] = None,
        delay: float = 0.0,
        sleep: Sleep = asyncio.sleep,
        label: Callable[[Any], str] = str,
    ):
        self.parse_item = parse_item
        self.fetch_detail = fetch_detail
        self.item_cap = item_cap
        self.delay = delay
        self.sleep = sleep
        self.label = label
        self.stats = WalkStats()

    def skip(self, reason: str, error: Optional[Exception] = None) -> None:
        """Count an entry as skipped and log why."""
        self.stats.skipped += 1
        if error is not None:
            logger.warning(f"Skipping {reason}: {error}")
        else:
            logger.warning(f"Skipping {reason}")

    def reject(self, item: Any, error: Exception) -> None:
        """Move an already yielded item from processed to skipped."""
        self.stats.processed -= 1
        self.skip(self.label(item), error)

    async def walk(self, raw_items: Iterable[Any]) -> AsyncIterator[Tuple[Any, Any]]:
        """
        Yield ``(item, detail)`` for every entry that resolves.

        The cap is applied to the raw list first, so entries that are later
        skipped still count toward it.
        """
        entries = list(raw_items)
        if self.item_cap is not None:
            entries = entries[:self.item_cap]

        self.stats = WalkStats(listed=len(entries))
        detail_calls = 0

        try:
            for position, raw in enumerate(entries):
                try:
                    item = self._parse(raw, position)
                except TransformationError as e:
                    self.skip(f"entry #{position}", e)
                    continue

                if self.fetch_detail is None:
                    self.stats.processed += 1
                    yield item, item
                    continue

                if detail_calls and self.delay > 0:
                    await self.sleep(self.delay)
                detail_calls += 1

                try:
                    detail = await self.fetch_detail(item)
                except (ExtractionError, TransformationError) as e:
                    self.skip(f"detail for {self.label(item)}", e)
                    continue

                self.stats.processed += 1
                yield item, detail
        finally:
            logger.info(
                f"Walk finished: listed={self.stats.listed}, "
                f"processed={self.stats.processed}, skipped={self.stats.skipped}"
            )

    def _parse(self, raw: Any, position: int) -> Any:
        try:
            return self.parse_item(raw)
        except ValidationError as e:
            raise RecordValidationError(
                "List entry has no usable identifier",
                context={"position": position, "field_errors": e.errors(include_url=False)},
                original_exception=e
            )
