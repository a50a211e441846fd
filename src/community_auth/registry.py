"""
In-memory Community Registry.

Holds the current :class:`RegistryState`, runs one transition at a time
and relays the notifications of successful calls to the event registry.
"""

from __future__ import annotations

import threading
from typing import Sequence

import structlog

from .core import transitions
from .core.errors import Outcome, Transition
from .core.record import CommunityRecord
from .core.state import RegistryState
from .core.transitions import Authorizer, is_authorized
from .events import EventRegistry, default_registry

log = structlog.get_logger(__name__)


class CommunityRegistry:
    """Stateful façade over the pure transitions in ``core.transitions``."""

    def __init__(
        self,
        state: RegistryState | None = None,
        *,
        authorize: Authorizer = is_authorized,
        events: EventRegistry | None = None,
    ):
        self._state = state if state is not None else RegistryState()
        self._authorize = authorize
        self._events = events if events is not None else default_registry()
        self._lock = threading.Lock()

    @property
    def state(self) -> RegistryState:
        return self._state

    # ---- writes ---------------------------------------------------------
    def create_community(
        self, community_id: int, name: str, address: str, *, caller: str
    ) -> Outcome:
        with self._lock:
            result = transitions.create_community(
                self._state, caller, community_id, name, address
            )
            self._commit(result, "create_community", caller)
        self._events.emit_all(result.outcome.notifications)
        return result.outcome

    def create_council_for_community(
        self, community_id: int, council_members: Sequence[str], *, caller: str
    ) -> Outcome:
        with self._lock:
            result = transitions.create_council_for_community(
                self._state,
                caller,
                community_id,
                council_members,
                authorize=self._authorize,
            )
            self._commit(result, "create_council_for_community", caller)
        self._events.emit_all(result.outcome.notifications)
        return result.outcome

    # ---- reads ----------------------------------------------------------
    def get_community(self, community_id: int) -> CommunityRecord | None:
        return transitions.get_community(self._state, community_id)

    def get_latest_community_id(self) -> int:
        return transitions.get_latest_community_id(self._state)

    def _commit(self, result: Transition, operation: str, caller: str) -> None:
        outcome = result.outcome
        if not outcome.ok:
            log.info(
                "call_rejected",
                operation=operation,
                caller=caller,
                community_id=outcome.community_id,
                error=outcome.error.value,
            )
            return
        self._state = result.state
        log.info(
            "call_applied",
            operation=operation,
            caller=caller,
            community_id=outcome.community_id,
        )
