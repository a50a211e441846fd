"""
Closed error taxonomy and the result values every transition returns.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel

from .notifications import Notification
from .state import RegistryState


class ErrorKind(str, Enum):
    NOT_EXISTS = "NotExists"
    NOT_OWNER = "NotOwner"
    ALREADY_EXISTS = "AlreadyExists"


class CommunityError(Exception):
    """Raised by :meth:`Outcome.unwrap` for callers that prefer exceptions."""

    def __init__(self, kind: ErrorKind, community_id: int | None = None):
        self.kind = kind
        self.community_id = community_id
        super().__init__(
            kind.value if community_id is None else f"{kind.value}: {community_id}"
        )


class Outcome(BaseModel):
    """Success/failure of one call plus the notifications it emitted."""

    error: ErrorKind | None = None
    community_id: int | None = None
    notifications: tuple[Notification, ...] = ()

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, community_id: int, *notifications: Notification) -> "Outcome":
        return cls(community_id=community_id, notifications=notifications)

    @classmethod
    def failure(cls, kind: ErrorKind, community_id: int) -> "Outcome":
        return cls(error=kind, community_id=community_id)

    def unwrap(self) -> None:
        if self.error is not None:
            raise CommunityError(self.error, self.community_id)


class Transition(NamedTuple):
    """``(new state, outcome)``; on failure ``state`` is the input snapshot."""

    state: RegistryState
    outcome: Outcome
