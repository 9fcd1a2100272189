"""Domain models for household groups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """A household group sharing pickups."""

    id: str
    name: str
    created_at: str
    description: str | None = None


@dataclass(frozen=True)
class GroupMembership:
    """Links a user to the single group they belong to."""

    id: str
    group_id: str
    user_id: str
    joined_at: str


@dataclass(frozen=True)
class GroupEnrollment:
    """Group plus the membership created when a user enrolled."""

    group: Group
    membership: GroupMembership
