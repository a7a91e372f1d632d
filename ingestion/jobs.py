"""
Run a batch of sources with shared resources.

One HTTP client serves the whole batch; each source run gets its own
session so a failed run cannot leave the next one with a broken transaction.
"""

from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.ext.asyncio import async_sessionmaker
import httpx
import logging

from core.exceptions import ETLException
from ingestion.extractors.api_client import MarketDataClient
from ingestion.loaders.snapshot_writer import SnapshotWriter
from ingestion.runner import ETLRunner
from ingestion.sources import build_adapter

logger = logging.getLogger(__name__)


async def run_source(
    name: str,
    session_maker: async_sessionmaker,
    http: httpx.AsyncClient,
    **adapter_options
) -> Dict[str, Any]:
    """Run one source in its own session. Fatal errors propagate."""
    adapter = build_adapter(name, MarketDataClient(http, source_name=name), **adapter_options)
    async with session_maker() as session:
        runner = ETLRunner(SnapshotWriter(session))
        return await runner.run(adapter)


async def run_sources(
    names: Sequence[str],
    session_maker: async_sessionmaker,
    http: httpx.AsyncClient,
    stop_on_error: bool = False
) -> List[Dict[str, Any]]:
    """
    Run sources one after another.

    A fatal error in one source is logged and recorded as a ``failed``
    result; the remaining sources still run unless ``stop_on_error`` is set.
    """
    results = []

    for name in names:
        try:
            results.append(await run_source(name, session_maker, http))

        except ETLException as e:
            logger.error(
                f"Source {name} failed: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            results.append({"source": name, "status": "failed", "error": e.to_dict()})
            if stop_on_error:
                break

    return results


def summarize(results: List[Dict[str, Any]]) -> Optional[str]:
    """Comma-separated names of failed sources, or None."""
    failed = [r["source"] for r in results if r["status"] == "failed"]
    return ", ".join(failed) if failed else None
