from __future__ import annotations

from studygroup_client.domain.entities.photo import Photo
from studygroup_client.infrastructure.http.schemas.photo import PhotoResponse


def schema_to_entity(schema: PhotoResponse) -> Photo:
    return Photo(
        id=schema.photo_id,
        group_id=schema.group_id,
        uploader_id=schema.user_id,
        uploader_nickname=schema.username,
        image_url=schema.image_url,
        original_filename=schema.original_filename,
        description=schema.description,
        file_size=schema.file_size,
        created_at=schema.created_at,
    )
