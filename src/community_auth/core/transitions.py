"""
Pure transition functions: ``(state, caller, arguments) -> Transition``.

Nothing here performs I/O or keeps state of its own. A failed call hands
back the very snapshot it was given; a successful one hands back a new
snapshot built from a private draft, so no partial change is ever visible.
"""

from __future__ import annotations

from typing import Callable, Sequence

from pydantic import validate_call

from .errors import ErrorKind, Outcome, Transition
from .notifications import CommunityCreated, CouncilChanged
from .record import AccountId, CommunityId, CommunityRecord
from .state import RegistryState

Authorizer = Callable[[CommunityRecord, str], bool]


def is_authorized(record: CommunityRecord, caller: str) -> bool:
    """Only the recorded owner may replace a council."""
    return record.owner == caller


@validate_call(config={"arbitrary_types_allowed": True})
def create_community(
    state: RegistryState,
    caller: AccountId,
    community_id: CommunityId,
    name: str,
    address: str,
) -> Transition:
    if community_id in state:
        return Transition(state, Outcome.failure(ErrorKind.ALREADY_EXISTS, community_id))

    record = CommunityRecord.founded_by(caller, community_id, name, address)
    draft = state.draft()
    update_community(draft, record)
    event = CommunityCreated(owner=record.owner, name=record.name, community_id=record.id)
    return Transition(
        RegistryState(draft, latest_community_id=community_id),
        Outcome.success(community_id, event),
    )


@validate_call(config={"arbitrary_types_allowed": True})
def create_council_for_community(
    state: RegistryState,
    caller: AccountId,
    community_id: CommunityId,
    council_members: Sequence[AccountId],
    authorize: Authorizer = is_authorized,
) -> Transition:
    current = state.get(community_id)
    if current is None:
        return Transition(state, Outcome.failure(ErrorKind.NOT_EXISTS, community_id))
    if not authorize(current, caller):
        return Transition(state, Outcome.failure(ErrorKind.NOT_OWNER, community_id))

    # caller is appended even when already listed
    replacement = current.with_councils([*council_members, caller])

    draft = state.draft()
    error = delete_community(draft, community_id)
    if error is not None:
        return Transition(state, Outcome.failure(error, community_id))
    update_community(draft, replacement)

    event = CouncilChanged(
        owner=replacement.owner,
        name=replacement.name,
        community_id=replacement.id,
        councils=replacement.councils,
    )
    return Transition(
        RegistryState(draft, latest_community_id=state.latest_community_id),
        Outcome.success(community_id, event),
    )


def get_community(state: RegistryState, community_id: int) -> CommunityRecord | None:
    return state.get(community_id)


def get_latest_community_id(state: RegistryState) -> int:
    return state.latest_community_id


# ---- draft helpers ----------------------------------------------------------
def delete_community(
    draft: dict[int, CommunityRecord], community_id: int
) -> ErrorKind | None:
    if community_id not in draft:
        return ErrorKind.NOT_EXISTS
    del draft[community_id]
    return None


def update_community(draft: dict[int, CommunityRecord], record: CommunityRecord) -> None:
    draft[record.id] = record
