from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpdateProfileDTO:
    nickname: str | None
    bio: str | None
    profile_image: str | None = None


@dataclass(frozen=True, slots=True)
class ChangePasswordDTO:
    current_password: str
    new_password: str
