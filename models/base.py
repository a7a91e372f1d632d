from datetime import datetime, timezone
from sqlalchemy import Column, BigInteger, Integer, DateTime, JSON, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import declarative_base

Base = declarative_base()


# ============================================================================
# SHARED COLUMN TYPES
# ============================================================================

# BIGSERIAL on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY
SnapshotId = BigInteger().with_variant(Integer, "sqlite")

# text[] on PostgreSQL, JSON list elsewhere
TextList = ARRAY(Text).with_variant(JSON(), "sqlite")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# SNAPSHOT MIXIN
# ============================================================================

class SnapshotMixin:
    """
    Append-only snapshot row.

    Every fetch cycle inserts new rows; nothing here is ever updated or
    deleted by the pipeline, so there is no natural key. ``snapshot_id``
    only orders rows within a relation.
    """

    # Name of the column the sink stamps with the insertion time
    __stamp_column__ = "fetched_at"

    snapshot_id = Column(SnapshotId, primary_key=True, autoincrement=True)
    fetched_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
