from __future__ import annotations

from studygroup_client.application.dto.user import ChangePasswordDTO, UpdateProfileDTO
from studygroup_client.domain.entities.user import AuthResult, UserProfile
from studygroup_client.infrastructure.http.client import ApiClient, decode
from studygroup_client.infrastructure.http.mappers.user import profile_to_entity
from studygroup_client.infrastructure.http.repositories._envelope import accepted_auth
from studygroup_client.infrastructure.http.schemas.user import (
    ChangePasswordRequest,
    UpdateProfileRequest,
    UserStatsResponse,
)


class HttpUserRepository:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_profile(self, user_id: int) -> UserProfile:
        payload = await self._api.get(f"/users/{user_id}/profile")
        return profile_to_entity(decode(UserStatsResponse, payload))

    async def update_profile(self, user_id: int, dto: UpdateProfileDTO) -> AuthResult:
        body = UpdateProfileRequest(
            nickname=dto.nickname, bio=dto.bio, profile_image=dto.profile_image,
        )
        payload = await self._api.put(f"/users/{user_id}/profile", json=body.to_wire())
        return accepted_auth(payload, "Failed to update profile")

    async def change_password(self, user_id: int, dto: ChangePasswordDTO) -> AuthResult:
        body = ChangePasswordRequest(
            current_password=dto.current_password, new_password=dto.new_password,
        )
        payload = await self._api.put(f"/users/{user_id}/password", json=body.to_wire())
        return accepted_auth(payload, "Failed to change password")
