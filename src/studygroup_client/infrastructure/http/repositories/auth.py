from __future__ import annotations

from studygroup_client.application.dto.auth import LoginDTO, SignupDTO
from studygroup_client.domain.entities.user import AuthResult, NicknameAvailability
from studygroup_client.infrastructure.http.client import ApiClient, decode
from studygroup_client.infrastructure.http.repositories._envelope import accepted_auth
from studygroup_client.infrastructure.http.schemas.auth import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
)


class HttpAuthRepository:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def signup(self, dto: SignupDTO) -> AuthResult:
        body = SignupRequest(
            email=dto.email,
            password=dto.password,
            name=dto.name,
            nickname=dto.nickname,
            birth_date=dto.birth_date,
        )
        payload = await self._api.post("/auth/signup", json=body.to_wire())
        return accepted_auth(payload, "Signup failed")

    async def login(self, dto: LoginDTO) -> AuthResult:
        body = LoginRequest(email=dto.email, password=dto.password)
        payload = await self._api.post("/auth/login", json=body.to_wire())
        return accepted_auth(payload, "Login failed")

    async def check_nickname(self, nickname: str) -> NicknameAvailability:
        payload = await self._api.get("/auth/check-nickname", params={"nickname": nickname})
        response = decode(AuthResponse, payload)
        return NicknameAvailability(available=response.success, message=response.message)
