from __future__ import annotations

from dataclasses import dataclass

from studygroup_client.domain.value_objects.enums import PostType


@dataclass(frozen=True, slots=True)
class PostDraftDTO:
    """Body of both post creation and post update."""

    title: str
    content: str
    post_type: PostType = PostType.FREE
