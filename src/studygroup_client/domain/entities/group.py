from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from studygroup_client.domain.value_objects.enums import Category


@dataclass(frozen=True, slots=True)
class Group:
    id: int
    name: str
    description: str
    category: Category
    leader_id: int
    leader_nickname: str
    max_members: int
    current_members: int
    created_at: datetime | None
    is_member: bool


@dataclass(frozen=True, slots=True)
class GroupMember:
    user_id: int
    nickname: str | None
    profile_image: str | None
    is_leader: bool
    joined_at: datetime | None
    is_new: bool = False


@dataclass(frozen=True, slots=True)
class GroupDetail:
    id: int
    name: str
    description: str
    category: Category
    current_members: int
    max_members: int
    created_at: datetime | None
    is_joined: bool
    is_leader: bool
    members: tuple[GroupMember, ...] = field(default_factory=tuple)

    def has_member(self, user_id: int) -> bool:
        return any(m.user_id == user_id for m in self.members)
