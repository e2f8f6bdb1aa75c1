"""Helpers for the ``{success, message}`` envelope most mutations return."""
from __future__ import annotations

from typing import Any

from studygroup_client.application.exceptions import RejectedError
from studygroup_client.domain.entities.user import AuthResult
from studygroup_client.infrastructure.http.client import decode
from studygroup_client.infrastructure.http.mappers.user import auth_to_entity
from studygroup_client.infrastructure.http.schemas.auth import AuthResponse
from studygroup_client.infrastructure.http.schemas.common import ApiResponse


def require_success(payload: Any, fallback: str) -> str:
    """Return the server message, raising RejectedError on ``success=false``."""
    if payload is None:
        return ""
    response = decode(ApiResponse, payload)
    if not response.success:
        raise RejectedError(response.message or fallback)
    return response.message


def accepted_auth(payload: Any, fallback: str) -> AuthResult:
    """Decode an AuthResponse, raising RejectedError on ``success=false``."""
    response = decode(AuthResponse, payload)
    if not response.success:
        raise RejectedError(response.message or fallback)
    return auth_to_entity(response)
