from __future__ import annotations

from studygroup_client.infrastructure.http.schemas.common import WireModel


class SignupRequest(WireModel):
    email: str
    password: str
    name: str
    nickname: str
    birth_date: str


class LoginRequest(WireModel):
    email: str
    password: str


class AuthResponse(WireModel):
    success: bool
    message: str = ""
    token: str | None = None
    user_id: int | None = None
    nickname: str | None = None
