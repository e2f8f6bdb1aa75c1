from __future__ import annotations

from pathlib import Path
from typing import Protocol

from studygroup_client.domain.entities.photo import Photo


class PhotoRepository(Protocol):
    async def list_photos(self, group_id: int) -> list[Photo]: ...

    async def upload_photo(
        self, group_id: int, user_id: int, image: Path, description: str | None,
    ) -> Photo: ...

    async def delete_photo(self, photo_id: int, user_id: int, group_id: int | None = None) -> str: ...
