from __future__ import annotations

import mimetypes
from pathlib import Path

from studygroup_client.domain.entities.photo import Photo
from studygroup_client.infrastructure.http.client import ApiClient, decode, decode_list
from studygroup_client.infrastructure.http.mappers import photo as mapper
from studygroup_client.infrastructure.http.repositories._envelope import require_success
from studygroup_client.infrastructure.http.schemas.photo import PhotoResponse


class HttpPhotoRepository:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_photos(self, group_id: int) -> list[Photo]:
        payload = await self._api.get(f"/groups/{group_id}/photos")
        return [mapper.schema_to_entity(p) for p in decode_list(PhotoResponse, payload or [])]

    async def upload_photo(
        self, group_id: int, user_id: int, image: Path, description: str | None,
    ) -> Photo:
        content_type = mimetypes.guess_type(image.name)[0] or "image/*"
        data = {"description": description} if description is not None else None
        with image.open("rb") as fh:
            payload = await self._api.post(
                f"/groups/{group_id}/photos",
                params={"userId": user_id},
                files={"image": (image.name, fh, content_type)},
                data=data,
            )
        return mapper.schema_to_entity(decode(PhotoResponse, payload))

    async def delete_photo(self, photo_id: int, user_id: int, group_id: int | None = None) -> str:
        payload = await self._api.delete(
            f"/photos/{photo_id}", params={"userId": user_id, "groupId": group_id},
        )
        return require_success(payload, "Failed to delete photo")
