"""
Notification payloads produced by successful transitions.

They are plain values; relaying them to observers is the job of
``community_auth.events``.
"""

from __future__ import annotations

from pydantic import BaseModel

from .record import AccountId, CommunityId


class Notification(BaseModel):
    owner: AccountId
    name: str
    community_id: CommunityId

    model_config = {"frozen": True}


class CommunityCreated(Notification):
    """A community was created by ``owner``."""


class CouncilChanged(Notification):
    """The council of a community was replaced."""

    councils: tuple[AccountId, ...]
