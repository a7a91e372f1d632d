import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import build_engine, init_database, verify_connection
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def main():
    logger.info("Connecting to database...")
    engine = build_engine()

    try:
        await verify_connection(engine)
        await init_database(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
