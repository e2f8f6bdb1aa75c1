from __future__ import annotations

from studygroup_client.domain.entities.post import Comment, Post, PostDetail
from studygroup_client.domain.value_objects.enums import PostType
from studygroup_client.infrastructure.http.schemas.post import (
    CommentResponse,
    PostDetailResponse,
    PostResponse,
)


def schema_to_entity(schema: PostResponse) -> Post:
    return Post(
        id=schema.post_id,
        group_id=schema.group_id,
        title=schema.title,
        content=schema.content,
        post_type=PostType.parse(schema.post_type),
        author_nickname=schema.username,
        author_id=schema.user_id,
        created_at=schema.created_at,
        comment_count=schema.comment_count,
    )


def comment_to_entity(schema: CommentResponse) -> Comment:
    return Comment(
        id=schema.comment_id,
        content=schema.content,
        author_nickname=schema.username,
        author_id=schema.user_id,
        created_at=schema.created_at,
    )


def detail_to_entity(schema: PostDetailResponse) -> PostDetail:
    return PostDetail(
        id=schema.post_id,
        group_id=schema.group_id,
        title=schema.title,
        content=schema.content,
        post_type=PostType.parse(schema.post_type),
        author_nickname=schema.username,
        author_id=schema.user_id,
        created_at=schema.created_at,
        is_leader=schema.is_leader,
        comments=tuple(comment_to_entity(c) for c in schema.comments),
    )
