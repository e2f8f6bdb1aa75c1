from __future__ import annotations

from studygroup_client.application.dto.group import CreateGroupDTO
from studygroup_client.application.exceptions import RejectedError
from studygroup_client.domain.entities.group import Group, GroupDetail
from studygroup_client.domain.value_objects.enums import Category
from studygroup_client.infrastructure.http.client import ApiClient, decode
from studygroup_client.infrastructure.http.mappers import group as mapper
from studygroup_client.infrastructure.http.repositories._envelope import require_success
from studygroup_client.infrastructure.http.schemas.group import (
    GroupDetailResponse,
    GroupListResponse,
    GroupRequest,
    GroupResponse,
    JoinGroupRequest,
)


class HttpGroupRepository:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def create_group(self, dto: CreateGroupDTO, user_id: int) -> Group:
        body = GroupRequest(
            group_name=dto.name,
            description=dto.description,
            category=dto.category,
            max_members=dto.max_members,
        )
        payload = await self._api.post(
            "/groups", params={"userId": user_id}, json=body.to_wire(),
        )
        return mapper.schema_to_entity(decode(GroupResponse, payload))

    async def list_groups(self, user_id: int) -> list[Group]:
        payload = await self._api.get("/groups", params={"userId": user_id})
        return self._groups(payload)

    async def list_groups_by_category(self, category: Category, user_id: int) -> list[Group]:
        payload = await self._api.get(
            f"/groups/category/{category.value}", params={"userId": user_id},
        )
        return self._groups(payload)

    async def list_my_groups(self, user_id: int) -> list[Group]:
        payload = await self._api.get("/groups/my-groups", params={"userId": user_id})
        return self._groups(payload)

    async def join_group(self, group_id: int, user_id: int, greeting: str = "") -> str:
        payload = await self._api.post(
            f"/groups/{group_id}/join",
            params={"userId": user_id},
            json=JoinGroupRequest(greeting=greeting).to_wire(),
        )
        return require_success(payload, "Failed to join group")

    async def leave_group(self, group_id: int, user_id: int) -> None:
        await self._api.delete(f"/groups/{group_id}/leave", params={"userId": user_id})

    async def kick_member(self, group_id: int, leader_id: int, target_user_id: int) -> str:
        payload = await self._api.delete(
            f"/groups/{group_id}/members/{target_user_id}",
            params={"leaderId": leader_id},
        )
        return require_success(payload, "Failed to remove member")

    async def get_group_detail(self, group_id: int, user_id: int) -> GroupDetail:
        payload = await self._api.get(
            f"/groups/{group_id}/detail", params={"userId": user_id},
        )
        return mapper.detail_to_entity(decode(GroupDetailResponse, payload))

    @staticmethod
    def _groups(payload: object) -> list[Group]:
        response = decode(GroupListResponse, payload)
        if not response.success:
            raise RejectedError(response.message or "Failed to load groups")
        return [mapper.schema_to_entity(g) for g in response.groups]
