from __future__ import annotations

from typing import Protocol

from studygroup_client.application.dto.user import ChangePasswordDTO, UpdateProfileDTO
from studygroup_client.domain.entities.user import AuthResult, UserProfile


class UserRepository(Protocol):
    async def get_profile(self, user_id: int) -> UserProfile: ...

    async def update_profile(self, user_id: int, dto: UpdateProfileDTO) -> AuthResult: ...

    async def change_password(self, user_id: int, dto: ChangePasswordDTO) -> AuthResult: ...
