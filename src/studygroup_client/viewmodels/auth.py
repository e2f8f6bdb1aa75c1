from __future__ import annotations

import logging

from studygroup_client.application.dto.auth import LoginDTO, SignupDTO
from studygroup_client.application.exceptions import RejectedError, ValidationError
from studygroup_client.application.projector import fail_fast, project
from studygroup_client.application.repositories.auth import AuthRepository
from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import RequestState, StateHolder
from studygroup_client.application.validation import (
    require_text,
    validate_login,
    validate_signup,
)
from studygroup_client.domain.entities.user import AuthResult, NicknameAvailability

logger = logging.getLogger(__name__)


class AuthViewModel:
    """Signup and login screens. Each operation has its own state."""

    def __init__(self, repository: AuthRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session
        self.signup_state: StateHolder[str] = StateHolder(name="auth.signup")
        self.login_state: StateHolder[AuthResult] = StateHolder(name="auth.login")
        self.nickname_check_state: StateHolder[NicknameAvailability] = StateHolder(
            name="auth.nickname_check",
        )

    async def signup(self, dto: SignupDTO) -> RequestState[str]:
        try:
            validate_signup(dto)
        except ValidationError as exc:
            return fail_fast(self.signup_state, exc)

        async def _signup() -> str:
            result = await self._repository.signup(dto)
            return result.message

        return await project(self.signup_state, _signup, fallback="Signup failed")

    async def login(self, email: str, password: str) -> RequestState[AuthResult]:
        dto = LoginDTO(email=email, password=password)
        try:
            validate_login(dto)
        except ValidationError as exc:
            return fail_fast(self.login_state, exc)

        async def _login() -> AuthResult:
            result = await self._repository.login(dto)
            if not result.user_id or result.user_id <= 0 or not result.nickname:
                logger.warning("Login response without identity: user_id=%s", result.user_id)
                raise RejectedError("Invalid login response from server")
            await self._session.login(result.user_id, result.nickname)
            return result

        return await project(self.login_state, _login, fallback="Login failed")

    async def check_nickname(self, nickname: str) -> RequestState[NicknameAvailability]:
        try:
            require_text(nickname, "Nickname")
        except ValidationError as exc:
            return fail_fast(self.nickname_check_state, exc)

        return await project(
            self.nickname_check_state,
            lambda: self._repository.check_nickname(nickname),
            fallback="Could not check nickname",
        )

    async def logout(self) -> None:
        await self._session.logout()
        self.login_state.reset()

    def reset_signup_state(self) -> None:
        self.signup_state.reset()

    def reset_login_state(self) -> None:
        self.login_state.reset()
