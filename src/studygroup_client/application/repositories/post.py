from __future__ import annotations

from typing import Protocol

from studygroup_client.application.dto.post import PostDraftDTO
from studygroup_client.domain.entities.post import Post, PostDetail
from studygroup_client.domain.value_objects.enums import PostType


class PostRepository(Protocol):
    async def list_posts(self, group_id: int, post_type: PostType | None = None) -> list[Post]: ...

    async def get_post_detail(self, post_id: int, user_id: int) -> PostDetail: ...

    async def create_post(self, group_id: int, user_id: int, dto: PostDraftDTO) -> str: ...

    async def update_post(self, post_id: int, user_id: int, dto: PostDraftDTO) -> Post: ...

    async def delete_post(self, post_id: int, user_id: int, group_id: int | None = None) -> str:
        """``group_id`` lets a group leader delete someone else's post."""
        ...

    async def create_comment(self, post_id: int, user_id: int, content: str) -> str: ...

    async def delete_comment(
        self, comment_id: int, user_id: int, group_id: int | None = None,
    ) -> str: ...
