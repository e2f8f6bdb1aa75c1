from __future__ import annotations

from typing import Protocol

from studygroup_client.application.dto.auth import LoginDTO, SignupDTO
from studygroup_client.domain.entities.user import AuthResult, NicknameAvailability


class AuthRepository(Protocol):
    async def signup(self, dto: SignupDTO) -> AuthResult:
        """Raise RejectedError when the server reports success=false."""
        ...

    async def login(self, dto: LoginDTO) -> AuthResult: ...

    async def check_nickname(self, nickname: str) -> NicknameAvailability:
        """An unavailable nickname is a normal answer, not an error."""
        ...
