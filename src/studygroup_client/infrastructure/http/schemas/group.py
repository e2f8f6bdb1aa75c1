from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from studygroup_client.domain.value_objects.enums import Category
from studygroup_client.infrastructure.http.schemas.common import WireModel


class GroupRequest(WireModel):
    group_name: str
    description: str
    category: Category
    max_members: int


class JoinGroupRequest(WireModel):
    greeting: str = ""


class GroupResponse(WireModel):
    group_id: int
    group_name: str
    description: str = ""
    category: Category
    leader_id: int
    leader_nickname: str = ""
    max_members: int
    current_members: int
    created_at: datetime | None = None
    is_member: bool = Field(
        default=False, validation_alias=AliasChoices("isMember", "member"),
    )


class GroupListResponse(WireModel):
    success: bool = True
    message: str = ""
    groups: list[GroupResponse] = []


class GroupMemberResponse(WireModel):
    user_id: int
    nickname: str | None = None
    profile_image: str | None = None
    leader: bool = False
    joined_at: datetime | None = None
    is_new: bool = False


class GroupDetailResponse(WireModel):
    group_id: int
    name: str
    description: str = ""
    category: Category
    current_members: int
    max_members: int
    created_at: datetime | None = None
    joined: bool = False
    leader: bool = False
    members: list[GroupMemberResponse] = []
