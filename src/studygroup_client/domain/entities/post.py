from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from studygroup_client.domain.value_objects.enums import PostType


@dataclass(frozen=True, slots=True)
class Comment:
    id: int
    content: str
    author_nickname: str
    author_id: int
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class Post:
    id: int
    group_id: int
    title: str
    content: str
    post_type: PostType
    author_nickname: str
    author_id: int
    created_at: datetime | None
    comment_count: int


@dataclass(frozen=True, slots=True)
class PostDetail:
    id: int
    group_id: int
    title: str
    content: str
    post_type: PostType
    author_nickname: str
    author_id: int
    created_at: datetime | None
    is_leader: bool
    comments: tuple[Comment, ...] = field(default_factory=tuple)
