"""
Community record kernel – *pure Pydantic* (no SQLAlchemy imports).

* Records are frozen; a council change ➜ copy ➜ new record with the same
  id / name / address / owner.
* The registry never edits a record in place, it swaps the whole value.
"""

from __future__ import annotations

from typing import Annotated, Iterable

from pydantic import BaseModel, Field, StringConstraints

U128_MAX = 2**128 - 1

AccountId = Annotated[str, StringConstraints(min_length=1)]
CommunityId = Annotated[int, Field(ge=0, le=U128_MAX)]


class CommunityRecord(BaseModel):
    """One community: immutable owner, free-form labels, ordered council."""

    id: CommunityId
    name: str
    address: str
    owner: AccountId
    councils: tuple[AccountId, ...]

    model_config = {"frozen": True}

    @classmethod
    def founded_by(
        cls, owner: str, community_id: int, name: str, address: str
    ) -> "CommunityRecord":
        """Fresh record whose council is just the founder."""
        return cls(
            id=community_id,
            name=name,
            address=address,
            owner=owner,
            councils=(owner,),
        )

    # copy‑on‑write mutation
    def with_councils(self, members: Iterable[str]) -> "CommunityRecord":
        data = self.model_dump(mode="python")
        data["councils"] = tuple(members)
        return self.__class__(**data)
