from __future__ import annotations

from studygroup_client.application.dto.post import PostDraftDTO
from studygroup_client.domain.entities.post import Post, PostDetail
from studygroup_client.domain.value_objects.enums import PostType
from studygroup_client.infrastructure.http.client import ApiClient, decode
from studygroup_client.infrastructure.http.mappers import post as mapper
from studygroup_client.infrastructure.http.repositories._envelope import require_success
from studygroup_client.infrastructure.http.schemas.post import (
    CommentRequest,
    PostDetailResponse,
    PostListResponse,
    PostRequest,
    PostResponse,
)


def _draft_body(dto: PostDraftDTO) -> dict:
    return PostRequest(
        title=dto.title, content=dto.content, post_type=dto.post_type.value,
    ).to_wire()


class HttpPostRepository:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_posts(self, group_id: int, post_type: PostType | None = None) -> list[Post]:
        payload = await self._api.get(
            f"/groups/{group_id}/posts",
            params={"postType": post_type.value if post_type else None},
        )
        response = decode(PostListResponse, payload)
        return [mapper.schema_to_entity(p) for p in response.posts]

    async def get_post_detail(self, post_id: int, user_id: int) -> PostDetail:
        payload = await self._api.get(f"/posts/{post_id}", params={"userId": user_id})
        return mapper.detail_to_entity(decode(PostDetailResponse, payload))

    async def create_post(self, group_id: int, user_id: int, dto: PostDraftDTO) -> str:
        payload = await self._api.post(
            f"/groups/{group_id}/posts",
            params={"userId": user_id},
            json=_draft_body(dto),
        )
        return require_success(payload, "Failed to create post")

    async def update_post(self, post_id: int, user_id: int, dto: PostDraftDTO) -> Post:
        payload = await self._api.put(
            f"/posts/{post_id}", params={"userId": user_id}, json=_draft_body(dto),
        )
        return mapper.schema_to_entity(decode(PostResponse, payload))

    async def delete_post(self, post_id: int, user_id: int, group_id: int | None = None) -> str:
        payload = await self._api.delete(
            f"/posts/{post_id}", params={"userId": user_id, "groupId": group_id},
        )
        return require_success(payload, "Failed to delete post")

    async def create_comment(self, post_id: int, user_id: int, content: str) -> str:
        payload = await self._api.post(
            f"/posts/{post_id}/comments",
            params={"userId": user_id},
            json=CommentRequest(content=content).to_wire(),
        )
        return require_success(payload, "Failed to create comment")

    async def delete_comment(
        self, comment_id: int, user_id: int, group_id: int | None = None,
    ) -> str:
        payload = await self._api.delete(
            f"/comments/{comment_id}", params={"userId": user_id, "groupId": group_id},
        )
        return require_success(payload, "Failed to delete comment")
