from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Photo:
    id: int
    group_id: int
    uploader_id: int
    uploader_nickname: str | None
    image_url: str
    original_filename: str | None
    description: str | None
    file_size: int | None
    created_at: datetime | None
