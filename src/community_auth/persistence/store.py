"""
Thin data-access layer around the `community_versions` table.

Writes go through the caller's session so that a whole host call commits
or rolls back as one unit; reads for inspection open their own session.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

import structlog
from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ..core.record import CommunityRecord
from ..core.state import RegistryState
from .models import CommunityRow

log = structlog.get_logger(__name__)


class CommunityStore:
    """Thin data‑access layer around the `community_versions` table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _new_session(self) -> Session:
        return Session(bind=self.engine, future=True)

    # ---- state ----------------------------------------------------------
    def restore(self, session: Session) -> RegistryState:
        """Rebuild the live snapshot from the newest version of each id."""
        newest = select(func.max(CommunityRow.seq)).group_by(CommunityRow.community_id)
        q = select(CommunityRow.data).where(CommunityRow.seq.in_(newest))
        communities: dict[int, CommunityRecord] = {}
        for (data,) in session.execute(q):
            record = CommunityRecord.model_validate(data)
            communities[record.id] = record
        return RegistryState(
            communities, latest_community_id=self.latest_created(session)
        )

    def latest_created(self, session: Session) -> int:
        """Id of the most recent version-0 row, 0 on an empty table."""
        q = (
            select(CommunityRow.community_id)
            .where(CommunityRow.version == 0)
            .order_by(CommunityRow.seq.desc())
            .limit(1)
        )
        key = session.execute(q).scalar()
        return int(key) if key is not None else 0

    def commit(
        self, session: Session, after: RegistryState, touched: Iterable[int]
    ) -> int:
        """
        Append one version row for each id a transition wrote, even when
        the new record equals the previous version.

        Returns the number of rows written. Committing is left to the
        session owner.
        """
        written = 0
        for community_id in touched:
            record = after.communities[community_id]
            key = str(community_id)
            last = session.execute(
                select(func.max(CommunityRow.version)).where(
                    CommunityRow.community_id == key
                )
            ).scalar()
            session.execute(
                insert(CommunityRow).values(
                    community_id=key,
                    version=0 if last is None else last + 1,
                    data=record.model_dump(mode="json"),
                )
            )
            written += 1
        log.debug("store_commit", rows=written)
        return written

    # ---- reads ----------------------------------------------------------
    def stream(self, community_id: int) -> Iterator[CommunityRow]:
        """Yield rows *oldest→newest*."""
        with self._new_session() as s:
            q = (
                select(CommunityRow)
                .where(CommunityRow.community_id == str(community_id))
                .order_by(CommunityRow.version)
            )
            yield from (row for (row,) in s.execute(q))

    def history(self, community_id: int) -> List[CommunityRecord]:
        return [CommunityRecord.model_validate(row.data) for row in self.stream(community_id)]

    def latest(self, community_id: int) -> Optional[CommunityRecord]:
        """Return the live record for `community_id` or None."""
        with self._new_session() as s:
            q = (
                select(CommunityRow.data)
                .where(CommunityRow.community_id == str(community_id))
                .order_by(CommunityRow.version.desc())
                .limit(1)
            )
            row = s.execute(q).first()
            return CommunityRecord.model_validate(row.data) if row else None
