"""
Append snapshot rows to their relation (plain INSERT, one commit per row)
"""

from typing import Callable, Type
from datetime import datetime
from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from models.base import utc_now
from schemas.snapshots import SnapshotRow
from core.exceptions import DatabaseError
import logging

logger = logging.getLogger(__name__)


class SnapshotWriter:
    """
    Write normalized rows into append-only snapshot tables.

    Ensures:
    - Each row gets a fresh surrogate key and the insertion timestamp
    - No conflict handling; repeated runs add new rows
    - Each insert is committed on its own, so a failed run keeps what it wrote
    """

    def __init__(self, db_session: AsyncSession, clock: Callable[[], datetime] = utc_now):
        self.db = db_session
        self.clock = clock
        self.rows_written = 0

    async def write(self, model: Type, row: SnapshotRow) -> None:
        """
        Insert one row.

        Args:
            model: Target ORM model (its ``__stamp_column__`` receives the timestamp)
            row: Validated snapshot row

        Raises:
            DatabaseError: If the insert or commit fails
        """
        values = row.to_values()
        values[model.__stamp_column__] = self.clock()

        try:
            await self.db.execute(insert(model).values(**values))
            await self.db.commit()

        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseError(
                f"Failed to insert into {model.__table__.fullname}",
                context={
                    "operation": "INSERT",
                    "table_name": model.__table__.fullname,
                },
                original_exception=e
            )

        self.rows_written += 1
        logger.debug(f"Inserted row into {model.__table__.fullname}")
