"""
Command line entry point.

Commands:
    coingecko-etl run coins price ...   Run the named sources once
    coingecko-etl run --all             Run every registered source once
    coingecko-etl schedule              Run every source on an interval
    coingecko-etl init-db               Create schemas and tables

Exit status is 0 when every requested run finished (with or without
skipped items) and 1 when any run hit a fatal error.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from core.config import settings
from core.database import build_engine, build_session_maker, init_database, verify_connection
from core.exceptions import ETLException
from core.logging import setup_logging
from ingestion.extractors.api_client import build_http_client
from ingestion.jobs import run_sources, summarize
from ingestion.scheduler import ETLScheduler
from ingestion.sources import SOURCES

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coingecko-etl",
        description="Append-only market data snapshots from CoinGecko and DEX Screener",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level (default: {settings.LOG_LEVEL})",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="Run sources once")
    run.add_argument(
        "sources",
        nargs="*",
        metavar="SOURCE",
        help=f"One or more of: {', '.join(sorted(SOURCES))}",
    )
    run.add_argument("--all", action="store_true", help="Run every source")
    run.add_argument(
        "--stop-on-error",
        action="store_true",
        help="Do not run remaining sources after a fatal error",
    )

    schedule = commands.add_parser("schedule", help="Run every source on an interval")
    schedule.add_argument(
        "--interval",
        type=int,
        default=None,
        help=f"Minutes between runs (default: {settings.SCHEDULE_INTERVAL_MINUTES})",
    )
    schedule.add_argument(
        "--run-now",
        action="store_true",
        help="Run once immediately before waiting for the first interval",
    )

    commands.add_parser("init-db", help="Create schemas and tables")

    return parser


async def run_command(args: argparse.Namespace) -> int:
    names = sorted(SOURCES) if args.all else list(dict.fromkeys(args.sources))
    engine = build_engine(args.database_url)

    try:
        await verify_connection(engine)
        async with build_http_client() as http:
            results = await run_sources(
                names,
                build_session_maker(engine),
                http,
                stop_on_error=args.stop_on_error,
            )
    finally:
        await engine.dispose()

    failed = summarize(results)
    if failed:
        logger.error(f"Failed sources: {failed}")
        return 1

    logger.info(f"All {len(results)} sources completed")
    return 0


async def schedule_command(args: argparse.Namespace) -> int:
    engine = build_engine(args.database_url)
    await verify_connection(engine)

    scheduler = ETLScheduler(
        session_maker=build_session_maker(engine),
        interval_minutes=args.interval,
    )

    try:
        if args.run_now:
            await scheduler.run_etl_job()
        scheduler.start()
        await asyncio.Event().wait()
    except asyncio.CancelledError:
        pass
    finally:
        if scheduler.scheduler.running:
            scheduler.stop()
        await engine.dispose()

    return 0


async def init_db_command(args: argparse.Namespace) -> int:
    engine = build_engine(args.database_url)
    try:
        await verify_connection(engine)
        await init_database(engine)
    finally:
        await engine.dispose()
    return 0


COMMANDS = {
    "run": run_command,
    "schedule": schedule_command,
    "init-db": init_db_command,
}


async def async_main(args: argparse.Namespace) -> int:
    try:
        return await COMMANDS[args.command](args)
    except ETLException as e:
        logger.error(f"{args.command} failed: {e}", extra={"error_context": e.to_dict()})
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        if not (args.all or args.sources):
            parser.error("name at least one source or pass --all")
        unknown = [name for name in args.sources if name not in SOURCES]
        if unknown:
            parser.error(f"unknown source(s): {', '.join(unknown)}")

    setup_logging(args.log_level)

    try:
        return asyncio.run(async_main(args))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 1


if __name__ == "__main__":
    sys.exit(main())
