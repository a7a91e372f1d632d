import logging
from typing import Callable, Optional, Sequence
import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.ext.asyncio import async_sessionmaker
from core.config import settings
from core.database import build_engine, build_session_maker
from ingestion.extractors.api_client import build_http_client
from ingestion.jobs import run_sources
from ingestion.sources import SOURCES

logger = logging.getLogger(__name__)


class ETLScheduler:
    def __init__(
        self,
        session_maker: Optional[async_sessionmaker] = None,
        sources: Optional[Sequence[str]] = None,
        interval_minutes: Optional[int] = None,
        http_factory: Callable[[], httpx.AsyncClient] = build_http_client
    ):
        self.scheduler = AsyncIOScheduler()
        self.engine = None
        if session_maker is None:
            self.engine = build_engine()
            session_maker = build_session_maker(self.engine)
        self.SessionLocal = session_maker
        self.sources = list(sources or SOURCES)
        self.interval_minutes = interval_minutes or settings.SCHEDULE_INTERVAL_MINUTES
        self.http_factory = http_factory

    async def run_etl_job(self):
        """Job to run every configured source once"""
        logger.info(f"Scheduler: Starting snapshot job for {len(self.sources)} sources")
        async with self.http_factory() as http:
            results = await run_sources(self.sources, self.SessionLocal, http)

        failed = [r["source"] for r in results if r["status"] == "failed"]
        if failed:
            logger.error(f"Scheduler: snapshot job finished with failures: {', '.join(failed)}")
        else:
            logger.info("Scheduler: snapshot job finished")
        return results

    def start(self):
        """Start the scheduler"""
        self.scheduler.add_job(
            self.run_etl_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id="snapshot_job",
            replace_existing=True
        )
        self.scheduler.start()
        logger.info(f"ETL Scheduler started (every {self.interval_minutes} minutes)")

    def stop(self):
        self.scheduler.shutdown()
        logger.info("ETL Scheduler stopped")
