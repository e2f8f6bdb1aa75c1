from __future__ import annotations

from studygroup_client.application.dto.post import PostDraftDTO
from studygroup_client.application.exceptions import AppError, ValidationError
from studygroup_client.application.projector import error_reason, fail_fast, project
from studygroup_client.application.repositories.post import PostRepository
from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import Error, RequestState, StateHolder, Success
from studygroup_client.application.validation import require_text, validate_post
from studygroup_client.domain.entities.post import Post, PostDetail
from studygroup_client.domain.value_objects.enums import PostType


class PostViewModel:
    """Group board: post list, post detail with comments, and editing."""

    def __init__(self, repository: PostRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session
        self.post_list_state: StateHolder[list[Post]] = StateHolder(name="posts.list")
        self.post_detail_state: StateHolder[PostDetail] = StateHolder(name="posts.detail")
        self.create_post_state: StateHolder[str] = StateHolder(name="posts.create")
        self.update_post_state: StateHolder[Post] = StateHolder(name="posts.update")
        self.delete_post_state: StateHolder[str] = StateHolder(name="posts.delete")
        self.comment_state: StateHolder[str] = StateHolder(name="posts.comment")

    async def load_posts(
        self, group_id: int, post_type: PostType | None = None,
    ) -> RequestState[list[Post]]:
        return await project(
            self.post_list_state,
            lambda: self._repository.list_posts(group_id, post_type),
            fallback="Failed to load posts",
        )

    async def load_post_detail(self, post_id: int) -> RequestState[PostDetail]:
        return await project(
            self.post_detail_state,
            lambda: self._repository.get_post_detail(post_id, self._session.require_user_id()),
            fallback="Failed to load post",
        )

    async def create_post(self, group_id: int, dto: PostDraftDTO) -> RequestState[str]:
        try:
            validate_post(dto)
        except ValidationError as exc:
            return fail_fast(self.create_post_state, exc)
        return await project(
            self.create_post_state,
            lambda: self._repository.create_post(group_id, self._session.require_user_id(), dto),
            fallback="Failed to create post",
        )

    def reset_create_post_state(self) -> None:
        self.create_post_state.reset()

    async def update_post(self, post_id: int, dto: PostDraftDTO) -> RequestState[Post]:
        try:
            validate_post(dto)
        except ValidationError as exc:
            return fail_fast(self.update_post_state, exc)
        result = await project(
            self.update_post_state,
            lambda: self._repository.update_post(post_id, self._session.require_user_id(), dto),
            fallback="Failed to update post",
        )
        if not isinstance(result, Error):
            await self.load_post_detail(post_id)
        return result

    async def delete_post(self, post_id: int, group_id: int | None = None) -> RequestState[str]:
        """``group_id`` is passed when a leader deletes another member's post.

        On success the detail goes back to Idle so the screen closes, and the
        group's post list is fetched again.
        """
        detail = self.post_detail_state.value
        list_group_id = group_id
        if list_group_id is None and isinstance(detail, Success) and detail.value.id == post_id:
            list_group_id = detail.value.group_id

        result = await project(
            self.delete_post_state,
            lambda: self._repository.delete_post(
                post_id, self._session.require_user_id(), group_id,
            ),
            fallback="Failed to delete post",
        )
        if isinstance(result, Error):
            self._fail_detail(result.reason)
            return result

        self.post_detail_state.next_ticket()
        self.post_detail_state.reset()
        if list_group_id is not None:
            await self.load_posts(list_group_id)
        return result

    async def create_comment(self, post_id: int, content: str) -> bool:
        """Input errors land on ``comment_state``; the loaded detail stays as is."""
        try:
            require_text(content, "Comment")
        except ValidationError as exc:
            fail_fast(self.comment_state, exc)
            return False
        self.comment_state.reset()
        try:
            await self._repository.create_comment(
                post_id, self._session.require_user_id(), content,
            )
        except AppError as exc:
            self._fail_detail(error_reason(exc, "Failed to create comment"))
            return False
        await self.load_post_detail(post_id)
        return True

    async def delete_comment(self, post_id: int, comment_id: int, group_id: int | None = None) -> bool:
        try:
            await self._repository.delete_comment(
                comment_id, self._session.require_user_id(), group_id,
            )
        except AppError as exc:
            self._fail_detail(error_reason(exc, "Failed to delete comment"))
            return False
        await self.load_post_detail(post_id)
        return True

    def _fail_detail(self, reason: str) -> None:
        self.post_detail_state.next_ticket()
        self.post_detail_state.set(Error(reason))
