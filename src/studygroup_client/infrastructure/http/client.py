"""Thin async wrapper around httpx for the StudyApp REST API."""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Self, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from studygroup_client.application.exceptions import RejectedError, TransportError
from studygroup_client.config import settings

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def decode(schema: type[M], payload: Any) -> M:
    """Validate a JSON payload; a shape mismatch is a transport fault."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise TransportError(f"Malformed {schema.__name__} payload") from exc


def decode_list(schema: type[M], payload: Any) -> list[M]:
    try:
        return TypeAdapter(list[schema]).validate_python(payload)  # type: ignore[valid-type]
    except PydanticValidationError as exc:
        raise TransportError(f"Malformed {schema.__name__} list payload") from exc


def _rejection_message(response: httpx.Response) -> str | None:
    """Server message of an error body shaped like ``{success: false, message}``."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("success") is False and body.get("message"):
        return str(body["message"])
    return None


class ApiClient:
    """Issues requests relative to ``API_BASE_URL`` and returns decoded JSON.

    Every failure is raised as ``TransportError`` except an error status whose
    body carries ``success=false``, which becomes ``RejectedError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=httpx.Timeout(
                settings.HTTP_TIMEOUT_SECONDS,
                connect=settings.HTTP_CONNECT_TIMEOUT_SECONDS,
            ),
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("%s %s params=%s", method, path, query)
        try:
            response = await self._http.request(
                method, path, params=query, json=json, data=data, files=files,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, path)
            raise TransportError("Request timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(f"Cannot reach server: {exc}") from exc

        if response.is_error:
            rejection = _rejection_message(response)
            if rejection is not None:
                raise RejectedError(rejection)
            logger.warning("%s %s returned %d", method, path, response.status_code)
            raise TransportError(
                f"Server returned {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError("Malformed response body") from exc

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
