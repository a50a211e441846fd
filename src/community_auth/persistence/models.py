"""
Single-table schema: every version of every community lives here.
"""

import datetime as dt

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def now_utc() -> dt.datetime:  # compact timezone‑aware timestamp
    return dt.datetime.now(tz=dt.timezone.utc)


class CommunityRow(Base):
    """Append-only log; the highest ``version`` per id is the live record."""

    __tablename__ = "community_versions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    # decimal text, u128 ids overflow BIGINT
    community_id = Column(String(39), nullable=False, index=True)
    version = Column(Integer, nullable=False)
    created_ts = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    data = Column(JSON, nullable=False)
