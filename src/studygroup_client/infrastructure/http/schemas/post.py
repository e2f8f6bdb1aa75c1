from __future__ import annotations

from datetime import datetime

from studygroup_client.infrastructure.http.schemas.common import WireModel


class PostRequest(WireModel):
    title: str
    content: str
    post_type: str


class CommentRequest(WireModel):
    content: str


class PostResponse(WireModel):
    post_id: int
    group_id: int
    title: str
    content: str
    post_type: str = "FREE"
    username: str = ""
    user_id: int
    created_at: datetime | None = None
    comment_count: int = 0


class PostListResponse(WireModel):
    posts: list[PostResponse] = []


class CommentResponse(WireModel):
    comment_id: int
    content: str
    username: str = ""
    user_id: int
    created_at: datetime | None = None


class PostDetailResponse(WireModel):
    post_id: int
    group_id: int
    title: str
    content: str
    post_type: str = "FREE"
    username: str = ""
    user_id: int
    created_at: datetime | None = None
    comments: list[CommentResponse] = []
    is_leader: bool = False
