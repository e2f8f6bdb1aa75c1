from __future__ import annotations

from datetime import datetime

from studygroup_client.infrastructure.http.schemas.common import WireModel


class PhotoResponse(WireModel):
    photo_id: int
    group_id: int
    user_id: int
    username: str | None = None
    image_url: str
    original_filename: str | None = None
    description: str | None = None
    file_size: int | None = None
    created_at: datetime | None = None
