from __future__ import annotations

import pytest

from community_auth.events import EventRegistry
from community_auth.registry import CommunityRegistry

X, Y, B, C, D = "alice", "eve", "bob", "charlie", "django"


@pytest.fixture
def events() -> EventRegistry:
    return EventRegistry()


@pytest.fixture
def registry(events: EventRegistry) -> CommunityRegistry:
    return CommunityRegistry(events=events)
