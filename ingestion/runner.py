# ============================================================================
# File: ingestion/runner.py
# Description: Snapshot run orchestrator with per-item failure isolation
# ============================================================================
"""
ETL Runner - Orchestrates list → walk → extract → write for one source.

This module provides run orchestration with:
- Fatal handling of list and storage failures
- Partial failure support (an item that cannot be resolved or shaped is
  skipped, the rest of the run continues)
- Detailed error context and logging
- Accurate per-run counters
"""

from contextlib import aclosing
from typing import Any, Dict, List
from pydantic import ValidationError
import asyncio
import logging

from ingestion.base import SourceAdapter
from ingestion.loaders.snapshot_writer import SnapshotWriter
from ingestion.walker import Sleep
from core.exceptions import (
    ETLException,
    ExtractionError,
    LoadError,
    RecordValidationError,
    TransformationError,
)
from schemas.snapshots import SnapshotRow

logger = logging.getLogger(__name__)


class ETLRunner:
    """
    Snapshot run orchestrator.

    Responsibilities:
    - Fetch the source list (any failure ends the run)
    - Walk items with the source's cap and pacing
    - Build rows per item, skipping items whose rows cannot be built
    - Append every row through the writer (any failure ends the run)
    - Report run counters
    """

    def __init__(self, writer: SnapshotWriter, sleep: Sleep = asyncio.sleep):
        self.writer = writer
        self.sleep = sleep

    async def run(self, adapter: SourceAdapter) -> Dict[str, Any]:
        """
        Run one snapshot cycle for a source.

        Pipeline phases:
        1. List - Fetch raw entries
        2. Walk - Resolve entries (and details) one at a time
        3. Extract - Build normalized rows
        4. Write - Append rows with the fetch timestamp

        Args:
            adapter: Source adapter instance

        Returns:
            Dictionary with run statistics:
            - source: Source name
            - status: "success" or "partial_success"
            - items_listed: Entries considered after the cap
            - items_processed: Items that produced rows (possibly zero)
            - items_skipped: Items dropped by a local failure
            - rows_written: Rows inserted

        Raises:
            ExtractionError: If the list cannot be fetched
            TransformationError: If the list payload has the wrong shape
            LoadError: If a row cannot be written
            ETLException: For unexpected errors
        """
        rows_before = self.writer.rows_written
        walker = adapter.walker(sleep=self.sleep)

        try:
            # --------------------------------------------------
            # PHASE 1: LIST
            # --------------------------------------------------
            logger.info(f"Starting run for {adapter.source_name}")

            try:
                raw_items = await adapter.fetch_list()

            except ETLException:
                raise

            except Exception as e:
                raise ExtractionError(
                    "Unexpected error while fetching the list",
                    context={"source_name": adapter.source_name},
                    original_exception=e
                )

            # --------------------------------------------------
            # PHASES 2-4: WALK, EXTRACT, WRITE
            # --------------------------------------------------
            async with aclosing(walker.walk(raw_items)) as walked:
                async for item, detail in walked:
                    try:
                        rows = self._build_rows(adapter, item, detail)
                    except TransformationError as e:
                        walker.reject(item, e)
                        continue

                    for row in rows:
                        await self.writer.write(adapter.model, row)

        except (ExtractionError, TransformationError, LoadError) as e:
            logger.error(
                f"Run failed for {adapter.source_name}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise

        except ETLException:
            raise

        except Exception as e:
            logger.exception(f"Unexpected error in run for {adapter.source_name}")
            raise ETLException(
                "Unexpected error in snapshot run",
                context={
                    "source_name": adapter.source_name,
                    "rows_written": self.writer.rows_written - rows_before,
                },
                original_exception=e
            )

        stats = walker.stats
        result = {
            "source": adapter.source_name,
            "status": "success" if stats.skipped == 0 else "partial_success",
            "items_listed": stats.listed,
            "items_processed": stats.processed,
            "items_skipped": stats.skipped,
            "rows_written": self.writer.rows_written - rows_before,
        }

        logger.info(
            f"Run completed for {adapter.source_name}: {result['status']} - "
            f"Listed: {stats.listed}, Processed: {stats.processed}, "
            f"Skipped: {stats.skipped}, Rows: {result['rows_written']}"
        )

        return result

    @staticmethod
    def _build_rows(adapter: SourceAdapter, item: Any, detail: Any) -> List[SnapshotRow]:
        try:
            return list(adapter.extract(item, detail))
        except ValidationError as e:
            raise RecordValidationError(
                "Row could not be built",
                context={
                    "source_name": adapter.source_name,
                    "item": adapter.item_label(item),
                    "field_errors": e.errors(include_url=False),
                },
                original_exception=e
            )
