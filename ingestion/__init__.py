"""
Snapshot pipeline components.

Every source follows the same shape: fetch a list, walk its items (with an
optional per-item detail call), build normalized rows, append them.

Modules:
    base: SourceAdapter, the contract every source implements
    walker: ItemWalker, capped and paced sequential walk over list entries
    runner: ETLRunner, one run of one source with per-item failure isolation
    jobs: Run several sources with a shared HTTP client
    scheduler: APScheduler integration for periodic runs
    cli: ``coingecko-etl`` command

Subpackages:
    extractors: HTTP client for the upstream APIs
    transformers: Numeric coercion and nested field helpers
    loaders: Append-only snapshot writer
    sources: The twelve source adapters and their registry

Architecture:
    1. List - a list fetch failure ends the run
    2. Walk - an entry without an id, or whose detail cannot be fetched, is skipped
    3. Extract - a malformed field becomes NULL; an unbuildable row skips the item
    4. Write - every row is its own committed INSERT; a write failure ends the run

Usage:
    from ingestion.extractors.api_client import MarketDataClient
    from ingestion.loaders.snapshot_writer import SnapshotWriter
    from ingestion.runner import ETLRunner
    from ingestion.sources import build_adapter

Example:
    async with build_session_maker(engine)() as session:
        runner = ETLRunner(SnapshotWriter(session))
        result = await runner.run(build_adapter("coins", MarketDataClient(http)))

    print(f"Wrote {result['rows_written']} rows")

Error Handling:
    All components raise exceptions from core.exceptions; the runner decides
    whether a failure is fatal or only skips an item.
"""

__all__ = [
    "SourceAdapter",
    "ItemWalker",
    "ETLRunner",
    "SnapshotWriter",
    "MarketDataClient",
]
