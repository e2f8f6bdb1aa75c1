from __future__ import annotations

from pathlib import Path

from studygroup_client.application.exceptions import AppError, ValidationError
from studygroup_client.application.projector import error_reason, fail_fast, project
from studygroup_client.application.repositories.photo import PhotoRepository
from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import Error, RequestState, StateHolder
from studygroup_client.domain.entities.photo import Photo


class PhotoViewModel:
    def __init__(self, repository: PhotoRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session
        self.photo_list_state: StateHolder[list[Photo]] = StateHolder(name="photos.list")
        self.upload_state: StateHolder[Photo] = StateHolder(name="photos.upload")

    async def load_photos(self, group_id: int) -> RequestState[list[Photo]]:
        return await project(
            self.photo_list_state,
            lambda: self._repository.list_photos(group_id),
            fallback="Failed to load photos",
        )

    async def upload_photo(
        self, group_id: int, image: Path, description: str | None = None,
    ) -> RequestState[Photo]:
        if not image.is_file():
            return fail_fast(self.upload_state, ValidationError(f"No such image: {image.name}"))
        result = await project(
            self.upload_state,
            lambda: self._repository.upload_photo(
                group_id, self._session.require_user_id(), image, description,
            ),
            fallback="Failed to upload photo",
        )
        if not isinstance(result, Error):
            await self.load_photos(group_id)
        return result

    async def delete_photo(self, group_id: int, photo_id: int) -> bool:
        try:
            await self._repository.delete_photo(
                photo_id, self._session.require_user_id(), group_id,
            )
        except AppError as exc:
            self.photo_list_state.next_ticket()
            self.photo_list_state.set(Error(error_reason(exc, "Failed to delete photo")))
            return False
        await self.load_photos(group_id)
        return True

    def reset_upload_state(self) -> None:
        self.upload_state.reset()
