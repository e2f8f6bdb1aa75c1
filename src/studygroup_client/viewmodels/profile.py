from __future__ import annotations

from studygroup_client.application.dto.user import ChangePasswordDTO, UpdateProfileDTO
from studygroup_client.application.exceptions import ValidationError
from studygroup_client.application.projector import fail_fast, project
from studygroup_client.application.repositories.user import UserRepository
from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import RequestState, StateHolder
from studygroup_client.application.validation import (
    validate_password_change,
    validate_profile,
)
from studygroup_client.domain.entities.user import UserProfile


class ProfileViewModel:
    def __init__(self, repository: UserRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session
        self.profile_state: StateHolder[UserProfile] = StateHolder(name="profile.load")
        self.update_state: StateHolder[str] = StateHolder(name="profile.update")

    async def load_profile(self) -> RequestState[UserProfile]:
        return await project(
            self.profile_state,
            lambda: self._repository.get_profile(self._session.require_user_id()),
            fallback="Failed to load profile",
        )

    async def update_profile(self, nickname: str, bio: str | None) -> RequestState[str]:
        dto = UpdateProfileDTO(nickname=nickname, bio=bio)
        try:
            validate_profile(dto)
        except ValidationError as exc:
            return fail_fast(self.update_state, exc)

        async def _update() -> str:
            result = await self._repository.update_profile(self._session.require_user_id(), dto)
            await self._session.update_nickname(nickname)
            return result.message

        return await project(self.update_state, _update, fallback="Failed to update profile")


class ChangePasswordViewModel:
    def __init__(self, repository: UserRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session
        self.change_password_state: StateHolder[str] = StateHolder(name="profile.password")

    async def change_password(
        self, current_password: str, new_password: str, confirm_password: str,
    ) -> RequestState[str]:
        try:
            validate_password_change(current_password, new_password, confirm_password)
        except ValidationError as exc:
            return fail_fast(self.change_password_state, exc)

        async def _change() -> str:
            result = await self._repository.change_password(
                self._session.require_user_id(),
                ChangePasswordDTO(current_password=current_password, new_password=new_password),
            )
            return result.message

        return await project(
            self.change_password_state, _change, fallback="Failed to change password",
        )
