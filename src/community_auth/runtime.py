"""
community_auth.runtime  ──  A reference execution environment for the registry.

Usage pattern in user code
--------------------------
    from community_auth.runtime import Host

    host = Host.init(database_url="sqlite:///communities.db")
    outcome = host.call("alice", "create_community",
                        community_id=1, name="alpha", address="addr1")

Each call restores the registry from the store, applies one pure transition
inside a single database transaction, commits only on success and then
relays the notifications.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, List, Optional, Sequence

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .bootstrap import init_store
from .core import transitions
from .core.errors import Outcome, Transition
from .core.record import CommunityRecord
from .core.state import RegistryState
from .core.transitions import Authorizer, is_authorized
from .events import EventRegistry, default_registry
from .settings import load_settings

log = structlog.get_logger(__name__)


class CallContext:
    """What the environment knows about the current invocation."""

    __slots__ = ("_caller",)

    def __init__(self, caller: str):
        self._caller = caller

    def caller(self) -> str:
        return self._caller


class Host:
    """
    Dispatches calls, attributes a caller to each, persists state and relays
    notifications. We keep a private singleton so applications don't have
    to pass the host around, but tests may build as many as they like.
    """

    _singleton: ClassVar[Optional["Host"]] = None

    def __init__(
        self,
        engine: Engine,
        *,
        events: EventRegistry | None = None,
        authorize: Authorizer = is_authorized,
    ):
        self.engine = engine
        self.store = init_store(engine)
        self.events = events if events is not None else default_registry()
        self._authorize = authorize
        self._operations: Dict[str, Callable[..., Transition]] = {
            "create_community": transitions.create_community,
            "create_council_for_community": self._replace_council,
        }

    def _replace_council(
        self,
        state: RegistryState,
        caller: str,
        community_id: int,
        council_members: Sequence[str],
    ) -> Transition:
        # authorizer is fixed by the host, never by call arguments
        return transitions.create_council_for_community(
            state, caller, community_id, council_members, authorize=self._authorize
        )

    # ---------- one-shot initialiser ----------
    @classmethod
    def init(cls, *, database_url: str | None = None, **kwargs: Any) -> "Host":
        if cls._singleton is None:
            url = database_url or load_settings().database_url
            engine = create_engine(url, pool_pre_ping=True, future=True)
            cls._singleton = cls(engine, **kwargs)
            log.info("host_initialised", database_url=engine.url.render_as_string())
        return cls._singleton

    @classmethod
    def instance(cls) -> "Host":
        if cls._singleton is None:
            raise RuntimeError("Host.init() has not been called")
        return cls._singleton

    @classmethod
    def reset(cls) -> None:
        if cls._singleton is not None:
            cls._singleton.engine.dispose()
        cls._singleton = None

    # ---------- calls ----------
    @property
    def operations(self) -> List[str]:
        return sorted(self._operations)

    def call(self, caller: str, operation: str, **arguments: Any) -> Outcome:
        try:
            apply = self._operations[operation]
        except KeyError:
            raise ValueError(f"unknown operation {operation!r}") from None

        ctx = CallContext(caller)
        with Session(self.engine, future=True) as s, s.begin():
            before = self.store.restore(s)
            result = apply(before, ctx.caller(), **arguments)
            outcome = result.outcome
            if outcome.ok:
                self.store.commit(s, result.state, [outcome.community_id])

        if outcome.ok:
            log.info(
                "call_committed",
                operation=operation,
                caller=caller,
                community_id=outcome.community_id,
            )
            self.events.emit_all(outcome.notifications)
        else:
            log.info(
                "call_rejected",
                operation=operation,
                caller=caller,
                community_id=outcome.community_id,
                error=outcome.error.value,
            )
        return outcome

    # ---------- queries ----------
    def get_community(self, community_id: int) -> CommunityRecord | None:
        return self.store.latest(community_id)

    def get_latest_community_id(self) -> int:
        with Session(self.engine, future=True) as s:
            return self.store.latest_created(s)

    def history(self, community_id: int) -> List[CommunityRecord]:
        return self.store.history(community_id)
