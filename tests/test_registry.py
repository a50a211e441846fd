from __future__ import annotations

import pytest
from pydantic import ValidationError

from community_auth import CommunityError, CommunityRecord, ErrorKind
from community_auth.core.notifications import CommunityCreated, CouncilChanged
from community_auth.registry import CommunityRegistry

from .conftest import B, C, D, X, Y


def test_create_community_records_caller_as_owner_and_council() -> None:
    reg = CommunityRegistry()

    outcome = reg.create_community(1, "alpha", "addr1", caller=X)

    assert outcome.ok
    assert reg.get_community(1) == CommunityRecord(
        id=1, name="alpha", address="addr1", owner=X, councils=(X,)
    )


def test_create_community_rejects_occupied_id(registry: CommunityRegistry) -> None:
    registry.create_community(1, "alpha", "addr1", caller=X)
    before = registry.get_community(1)

    for caller in (X, Y):
        outcome = registry.create_community(1, "beta", "addr2", caller=caller)
        assert not outcome.ok
        assert outcome.error is ErrorKind.ALREADY_EXISTS

    assert registry.get_community(1) == before
    assert len(registry.state) == 1


def test_owner_replaces_council_and_is_appended(registry: CommunityRegistry) -> None:
    registry.create_community(1, "alpha", "addr1", caller=X)

    outcome = registry.create_council_for_community(1, [B, C, D], caller=X)

    assert outcome.ok
    stored = registry.get_community(1)
    assert stored is not None
    assert stored.councils == (B, C, D, X)
    assert (stored.id, stored.name, stored.address, stored.owner) == (1, "alpha", "addr1", X)


def test_non_owner_cannot_replace_council(registry: CommunityRegistry) -> None:
    registry.create_community(1, "alpha", "addr1", caller=X)
    state_before = registry.state

    outcome = registry.create_council_for_community(1, [B], caller=Y)

    assert outcome.error is ErrorKind.NOT_OWNER
    assert registry.state is state_before
    assert registry.get_community(1).councils == (X,)


def test_council_replace_on_missing_community(registry: CommunityRegistry) -> None:
    outcome = registry.create_council_for_community(99, [B], caller=X)

    assert outcome.error is ErrorKind.NOT_EXISTS
    assert outcome.community_id == 99
    assert len(registry.state) == 0


def test_owner_already_in_members_is_duplicated(registry: CommunityRegistry) -> None:
    registry.create_community(1, "alpha", "addr1", caller=X)

    registry.create_council_for_community(1, [X, B], caller=X)

    assert registry.get_community(1).councils == (X, B, X)


def test_empty_member_list_leaves_only_owner(registry: CommunityRegistry) -> None:
    registry.create_community(1, "alpha", "addr1", caller=X)
    registry.create_council_for_community(1, [B, C], caller=X)

    registry.create_council_for_community(1, [], caller=X)

    assert registry.get_community(1).councils == (X,)


def test_successive_replacements_keep_identity_fields(registry: CommunityRegistry) -> None:
    registry.create_community(7, "narusedai-jitikai", "narusedai-machida-tokyo-japan", caller=X)
    original = registry.get_community(7)

    for members in ([B], [C, D], [D, D, B]):
        assert registry.create_council_for_community(7, members, caller=X).ok
        current = registry.get_community(7)
        assert current.model_dump(exclude={"councils"}) == original.model_dump(
            exclude={"councils"}
        )
        assert current.councils == (*members, X)


def test_ids_stay_unique_across_mixed_calls(registry: CommunityRegistry) -> None:
    calls = [
        ("create", 1, X),
        ("create", 2, Y),
        ("create", 1, Y),
        ("council", 2, Y),
        ("council", 1, Y),
        ("create", 2, X),
        ("council", 3, X),
    ]
    for kind, community_id, caller in calls:
        if kind == "create":
            registry.create_community(community_id, "n", "a", caller=caller)
        else:
            registry.create_council_for_community(community_id, [B], caller=caller)
        ids = [record.id for record in registry.state.communities.values()]
        assert len(ids) == len(set(ids))
        assert all(key == record.id for key, record in registry.state.communities.items())

    assert sorted(registry.state) == [1, 2]


def test_get_community_on_empty_registry_is_none(registry: CommunityRegistry) -> None:
    assert registry.get_community(1) is None


def test_latest_community_id_tracks_last_create(registry: CommunityRegistry) -> None:
    assert registry.get_latest_community_id() == 0

    registry.create_community(5, "a", "a", caller=X)
    registry.create_community(2, "b", "b", caller=X)
    registry.create_community(5, "c", "c", caller=Y)
    registry.create_council_for_community(5, [B], caller=X)

    assert registry.get_latest_community_id() == 2


def test_u128_ids_are_accepted(registry: CommunityRegistry) -> None:
    big = 2**128 - 1
    assert registry.create_community(big, "max", "edge", caller=X).ok
    assert registry.get_community(big).id == big


@pytest.mark.parametrize("community_id", [-1, 2**128])
def test_out_of_range_ids_are_invalid(registry: CommunityRegistry, community_id: int) -> None:
    with pytest.raises(ValidationError):
        registry.create_community(community_id, "n", "a", caller=X)
    assert len(registry.state) == 0


def test_empty_identities_are_invalid(registry: CommunityRegistry) -> None:
    with pytest.raises(ValidationError):
        registry.create_community(1, "n", "a", caller="")

    registry.create_community(1, "n", "a", caller=X)
    with pytest.raises(ValidationError):
        registry.create_council_for_community(1, [B, ""], caller=X)
    assert registry.get_community(1).councils == (X,)


def test_outcome_unwrap_raises_community_error(registry: CommunityRegistry) -> None:
    registry.create_community(1, "alpha", "addr1", caller=X).unwrap()

    with pytest.raises(CommunityError) as excinfo:
        registry.create_council_for_community(1, [B], caller=Y).unwrap()

    assert excinfo.value.kind is ErrorKind.NOT_OWNER
    assert excinfo.value.community_id == 1
    assert str(excinfo.value) == "NotOwner: 1"


def test_successful_calls_relay_notifications(events, registry: CommunityRegistry) -> None:
    seen = []
    events.register((CommunityCreated, CouncilChanged), seen.append)

    registry.create_community(1, "alpha", "addr1", caller=X)
    registry.create_council_for_community(1, [B, C], caller=X)

    assert seen == [
        CommunityCreated(owner=X, name="alpha", community_id=1),
        CouncilChanged(owner=X, name="alpha", community_id=1, councils=(B, C, X)),
    ]


def test_rejected_calls_emit_nothing(events, registry: CommunityRegistry) -> None:
    seen = []
    events.register((CommunityCreated, CouncilChanged), seen.append)
    registry.create_community(1, "alpha", "addr1", caller=X)
    seen.clear()

    outcomes = [
        registry.create_community(1, "alpha", "addr1", caller=X),
        registry.create_council_for_community(1, [B], caller=Y),
        registry.create_council_for_community(2, [B], caller=X),
    ]

    assert all(not o.ok and o.notifications == () for o in outcomes)
    assert seen == []


def test_custom_authorizer_replaces_owner_check(events) -> None:
    def council_member(record: CommunityRecord, caller: str) -> bool:
        return caller in record.councils

    reg = CommunityRegistry(authorize=council_member, events=events)
    reg.create_community(1, "alpha", "addr1", caller=X)
    reg.create_council_for_community(1, [B], caller=X)

    outcome = reg.create_council_for_community(1, [C], caller=B)

    assert outcome.ok
    stored = reg.get_community(1)
    assert stored.councils == (C, B)
    assert stored.owner == X
