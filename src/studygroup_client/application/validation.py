"""Client-side checks run before a request is issued."""
from __future__ import annotations

from studygroup_client.application.dto.auth import LoginDTO, SignupDTO
from studygroup_client.application.dto.group import CreateGroupDTO
from studygroup_client.application.dto.post import PostDraftDTO
from studygroup_client.application.dto.user import UpdateProfileDTO
from studygroup_client.application.exceptions import ValidationError

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 19
NICKNAME_MAX_LENGTH = 20
BIO_MAX_LENGTH = 100
MIN_GROUP_MEMBERS = 2


def require_text(value: str | None, field_label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field_label} is required")
    return value


def validate_password(password: str) -> None:
    """Letters and digits only, at least one of each, 8 to 19 characters."""
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LENGTH} to {PASSWORD_MAX_LENGTH} characters"
        )
    if not password.isalnum():
        raise ValidationError("Password cannot contain special characters")
    if not (any(c.isalpha() for c in password) and any(c.isdigit() for c in password)):
        raise ValidationError("Password must combine letters and digits")


def validate_login(dto: LoginDTO) -> None:
    require_text(dto.email, "Email")
    require_text(dto.password, "Password")


def validate_signup(dto: SignupDTO) -> None:
    require_text(dto.email, "Email")
    require_text(dto.password, "Password")
    require_text(dto.name, "Name")
    require_text(dto.nickname, "Nickname")
    require_text(dto.birth_date, "Birth date")
    validate_password(dto.password)


def validate_password_change(current: str, new: str, confirm: str) -> None:
    require_text(current, "Current password")
    validate_password(new)
    if new != confirm:
        raise ValidationError("Passwords do not match")


def validate_group(dto: CreateGroupDTO) -> None:
    require_text(dto.name, "Group name")
    if dto.max_members < MIN_GROUP_MEMBERS:
        raise ValidationError(f"Max members must be at least {MIN_GROUP_MEMBERS}")


def validate_post(dto: PostDraftDTO) -> None:
    require_text(dto.title, "Title")
    require_text(dto.content, "Content")


def validate_profile(dto: UpdateProfileDTO) -> None:
    nickname = require_text(dto.nickname, "Nickname")
    if len(nickname) > NICKNAME_MAX_LENGTH:
        raise ValidationError(f"Nickname must be at most {NICKNAME_MAX_LENGTH} characters")
    if dto.bio is not None and len(dto.bio) > BIO_MAX_LENGTH:
        raise ValidationError(f"Bio must be at most {BIO_MAX_LENGTH} characters")
