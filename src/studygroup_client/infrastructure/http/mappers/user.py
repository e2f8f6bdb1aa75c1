from __future__ import annotations

from studygroup_client.domain.entities.user import AuthResult, UserProfile
from studygroup_client.infrastructure.http.schemas.auth import AuthResponse
from studygroup_client.infrastructure.http.schemas.user import UserStatsResponse


def profile_to_entity(schema: UserStatsResponse) -> UserProfile:
    return UserProfile(
        user_id=schema.user_id,
        email=schema.email,
        name=schema.name,
        nickname=schema.nickname,
        birth_date=schema.birth_date,
        profile_image=schema.profile_image,
        bio=schema.bio,
        created_at=schema.created_at,
        post_count=schema.post_count,
        comment_count=schema.comment_count,
        photo_count=schema.photo_count,
        group_count=schema.group_count,
    )


def auth_to_entity(schema: AuthResponse) -> AuthResult:
    return AuthResult(
        success=schema.success,
        message=schema.message,
        token=schema.token,
        user_id=schema.user_id,
        nickname=schema.nickname,
    )
