from __future__ import annotations

from studygroup_client.domain.entities.group import Group, GroupDetail, GroupMember
from studygroup_client.infrastructure.http.schemas.group import (
    GroupDetailResponse,
    GroupMemberResponse,
    GroupResponse,
)


def schema_to_entity(schema: GroupResponse) -> Group:
    return Group(
        id=schema.group_id,
        name=schema.group_name,
        description=schema.description,
        category=schema.category,
        leader_id=schema.leader_id,
        leader_nickname=schema.leader_nickname,
        max_members=schema.max_members,
        current_members=schema.current_members,
        created_at=schema.created_at,
        is_member=schema.is_member,
    )


def member_to_entity(schema: GroupMemberResponse) -> GroupMember:
    return GroupMember(
        user_id=schema.user_id,
        nickname=schema.nickname,
        profile_image=schema.profile_image,
        is_leader=schema.leader,
        joined_at=schema.joined_at,
        is_new=schema.is_new,
    )


def detail_to_entity(schema: GroupDetailResponse) -> GroupDetail:
    return GroupDetail(
        id=schema.group_id,
        name=schema.name,
        description=schema.description,
        category=schema.category,
        current_members=schema.current_members,
        max_members=schema.max_members,
        created_at=schema.created_at,
        is_joined=schema.joined,
        is_leader=schema.leader,
        members=tuple(member_to_entity(m) for m in schema.members),
    )
