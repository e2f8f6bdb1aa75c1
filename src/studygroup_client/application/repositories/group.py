from __future__ import annotations

from typing import Protocol

from studygroup_client.application.dto.group import CreateGroupDTO
from studygroup_client.domain.entities.group import Group, GroupDetail
from studygroup_client.domain.value_objects.enums import Category


class GroupRepository(Protocol):
    async def create_group(self, dto: CreateGroupDTO, user_id: int) -> Group: ...

    async def list_groups(self, user_id: int) -> list[Group]: ...

    async def list_groups_by_category(self, category: Category, user_id: int) -> list[Group]: ...

    async def list_my_groups(self, user_id: int) -> list[Group]: ...

    async def join_group(self, group_id: int, user_id: int, greeting: str = "") -> str:
        """Return the server's confirmation message."""
        ...

    async def leave_group(self, group_id: int, user_id: int) -> None: ...

    async def kick_member(self, group_id: int, leader_id: int, target_user_id: int) -> str: ...

    async def get_group_detail(self, group_id: int, user_id: int) -> GroupDetail: ...
