"""
Single entry-point that wires SQLAlchemy into the persistence layer.
Call once at application start-up; `Host.init` does it for you.
"""

from sqlalchemy.engine import Engine

from .persistence.models import Base
from .persistence.store import CommunityStore


def init_store(engine: Engine) -> CommunityStore:
    """Create the `community_versions` table if needed and return a store."""
    Base.metadata.create_all(engine)  # ← this line creates table
    return CommunityStore(engine)
