from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class UserProfile:
    user_id: int
    email: str
    name: str
    nickname: str
    birth_date: str
    profile_image: str | None
    bio: str | None
    created_at: datetime | None
    post_count: int
    comment_count: int
    photo_count: int
    group_count: int


@dataclass(frozen=True, slots=True)
class AuthResult:
    """Outcome of signup/login/profile calls as reported by the server."""

    success: bool
    message: str
    token: str | None = None
    user_id: int | None = None
    nickname: str | None = None


@dataclass(frozen=True, slots=True)
class NicknameAvailability:
    available: bool
    message: str
