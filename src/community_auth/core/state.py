"""
Immutable snapshot of the registry's keyed store.

Transitions never touch a snapshot; they build a draft ``dict`` and wrap it
in a new ``RegistryState`` once every step has succeeded.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from .record import CommunityRecord


class RegistryState:
    """Read-only ``community_id -> CommunityRecord`` mapping."""

    __slots__ = ("_communities", "_latest_id")

    def __init__(
        self,
        communities: Mapping[int, CommunityRecord] | None = None,
        latest_community_id: int = 0,
    ):
        self._communities = MappingProxyType(dict(communities or {}))
        self._latest_id = latest_community_id

    @property
    def communities(self) -> Mapping[int, CommunityRecord]:
        return self._communities

    @property
    def latest_community_id(self) -> int:
        return self._latest_id

    def get(self, community_id: int) -> CommunityRecord | None:
        return self._communities.get(community_id)

    def draft(self) -> dict[int, CommunityRecord]:
        """Private, mutable copy of the mapping for a transition to work on."""
        return dict(self._communities)

    def __contains__(self, community_id: object) -> bool:
        return community_id in self._communities

    def __iter__(self) -> Iterator[int]:
        return iter(self._communities)

    def __len__(self) -> int:
        return len(self._communities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegistryState):
            return NotImplemented
        return (
            dict(self._communities) == dict(other._communities)
            and self._latest_id == other._latest_id
        )

    def __repr__(self) -> str:
        return (
            f"RegistryState(communities={len(self._communities)}, "
            f"latest_community_id={self._latest_id})"
        )
