from __future__ import annotations

from datetime import datetime

from studygroup_client.infrastructure.http.schemas.common import WireModel


class UpdateProfileRequest(WireModel):
    nickname: str | None = None
    bio: str | None = None
    profile_image: str | None = None


class ChangePasswordRequest(WireModel):
    current_password: str
    new_password: str


class UserStatsResponse(WireModel):
    user_id: int
    email: str
    name: str
    nickname: str
    birth_date: str = ""
    profile_image: str | None = None
    bio: str | None = None
    created_at: datetime | None = None
    post_count: int = 0
    comment_count: int = 0
    photo_count: int = 0
    group_count: int = 0
