"""Shared test fixtures."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import pytest_asyncio

from studygroup_client.application.dto.auth import LoginDTO, SignupDTO
from studygroup_client.application.dto.group import CreateGroupDTO
from studygroup_client.application.dto.post import PostDraftDTO
from studygroup_client.application.dto.user import ChangePasswordDTO, UpdateProfileDTO
from studygroup_client.application.exceptions import RejectedError, TransportError
from studygroup_client.application.session import SessionContext
from studygroup_client.domain.entities.group import Group, GroupDetail, GroupMember
from studygroup_client.domain.entities.message import Message
from studygroup_client.domain.entities.photo import Photo
from studygroup_client.domain.entities.post import Comment, Post, PostDetail
from studygroup_client.domain.entities.user import (
    AuthResult,
    NicknameAvailability,
    UserProfile,
)
from studygroup_client.domain.value_objects.enums import Category, PostType

BASE_TIME = datetime(2024, 5, 1, 10, 0, 0)
USER_ID = 42
LEADER_ID = 7


def ts(seconds: int) -> datetime:
    return BASE_TIME + timedelta(seconds=seconds)


def make_message(
    message_id: int,
    *,
    at: int | None = None,
    group_id: int = 1,
    sender_id: int = USER_ID,
    body: str = "hello",
) -> Message:
    return Message(
        id=message_id,
        conversation_id=group_id,
        sender_id=sender_id,
        sender_display_name=f"user{sender_id}",
        body=body,
        created_at=ts(message_id if at is None else at),
    )


def make_group(group_id: int = 1, *, category: Category = Category.PROGRAMMING) -> Group:
    return Group(
        id=group_id,
        name=f"group {group_id}",
        description="study together",
        category=category,
        leader_id=LEADER_ID,
        leader_nickname="leader",
        max_members=10,
        current_members=2,
        created_at=BASE_TIME,
        is_member=False,
    )


def make_detail(group_id: int = 1, member_ids: tuple[int, ...] = (LEADER_ID, USER_ID)) -> GroupDetail:
    return GroupDetail(
        id=group_id,
        name=f"group {group_id}",
        description="study together",
        category=Category.PROGRAMMING,
        current_members=len(member_ids),
        max_members=10,
        created_at=BASE_TIME,
        is_joined=True,
        is_leader=True,
        members=tuple(
            GroupMember(
                user_id=uid,
                nickname=f"user{uid}",
                profile_image=None,
                is_leader=uid == LEADER_ID,
                joined_at=BASE_TIME,
            )
            for uid in member_ids
        ),
    )


class InMemoryPreferenceStore:
    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def put_many(self, values: dict[str, str]) -> None:
        self.values.update(values)

    async def clear(self) -> None:
        self.values.clear()


@pytest.fixture
def preference_store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest_asyncio.fixture
async def session(preference_store) -> SessionContext:
    ctx = SessionContext(preference_store)
    await ctx.login(USER_ID, "alice")
    return ctx


@pytest.fixture
def anonymous_session(preference_store) -> SessionContext:
    return SessionContext(preference_store)


@dataclass
class FakeChatRepository:
    """Server stand-in: returns history newest-first like the real API."""

    messages: list[Message] = field(default_factory=list)
    fail_list: bool = False
    fail_after: bool = False
    fail_send: bool = False
    # When set, list_messages waits on the next gate before answering.
    list_gates: list[asyncio.Event] = field(default_factory=list)
    after_calls: list[datetime] = field(default_factory=list)
    sent: list[str] = field(default_factory=list)
    _next_id: int = 1000

    async def list_messages(self, group_id: int) -> list[Message]:
        snapshot = [m for m in self.messages if m.conversation_id == group_id]
        if self.list_gates:
            await self.list_gates.pop(0).wait()
        if self.fail_list:
            raise TransportError("connection refused")
        return sorted(snapshot, key=lambda m: m.order_key, reverse=True)

    async def list_messages_after(self, group_id: int, after: datetime) -> list[Message]:
        self.after_calls.append(after)
        if self.fail_after:
            raise TransportError("timeout")
        newer = [m for m in self.messages if m.conversation_id == group_id and m.created_at > after]
        return sorted(newer, key=lambda m: m.order_key)

    async def send_message(self, group_id: int, user_id: int, content: str) -> Message:
        self.sent.append(content)
        if self.fail_send:
            raise TransportError("connection reset")
        self._next_id += 1
        newest = max((m.created_at for m in self.messages), default=BASE_TIME)
        msg = Message(
            id=self._next_id,
            conversation_id=group_id,
            sender_id=user_id,
            sender_display_name="alice",
            body=content,
            created_at=newest + timedelta(seconds=1),
        )
        self.messages.append(msg)
        return msg


@dataclass
class FakeAuthRepository:
    accept_login: bool = True
    login_user_id: int | None = USER_ID
    taken_nicknames: set[str] = field(default_factory=lambda: {"taken"})
    nickname_gate: asyncio.Event | None = None
    signup_gate: asyncio.Event | None = None
    fail_transport: bool = False
    signups: list[SignupDTO] = field(default_factory=list)

    async def signup(self, dto: SignupDTO) -> AuthResult:
        if self.signup_gate is not None:
            await self.signup_gate.wait()
        if self.fail_transport:
            raise TransportError("offline")
        if dto.email == "dup@example.com":
            raise RejectedError("Email already registered")
        self.signups.append(dto)
        return AuthResult(success=True, message="Welcome!")

    async def login(self, dto: LoginDTO) -> AuthResult:
        if self.fail_transport:
            raise TransportError("offline")
        if not self.accept_login:
            raise RejectedError("Wrong email or password")
        return AuthResult(
            success=True,
            message="Logged in",
            token="token",
            user_id=self.login_user_id,
            nickname="alice" if self.login_user_id else None,
        )

    async def check_nickname(self, nickname: str) -> NicknameAvailability:
        if self.nickname_gate is not None:
            await self.nickname_gate.wait()
        if self.fail_transport:
            raise TransportError("offline")
        if nickname in self.taken_nicknames:
            return NicknameAvailability(available=False, message="Nickname in use")
        return NicknameAvailability(available=True, message="Nickname available")


@dataclass
class FakeGroupRepository:
    groups: dict[int, Group] = field(default_factory=dict)
    details: dict[int, GroupDetail] = field(default_factory=dict)
    memberships: dict[int, set[int]] = field(default_factory=dict)
    reject_kick: bool = False
    fail_transport: bool = False
    calls: list[str] = field(default_factory=list)

    def _check(self) -> None:
        if self.fail_transport:
            raise TransportError("offline")

    async def create_group(self, dto: CreateGroupDTO, user_id: int) -> Group:
        self.calls.append("create_group")
        self._check()
        group = replace(
            make_group(len(self.groups) + 1, category=dto.category),
            name=dto.name,
            leader_id=user_id,
        )
        self.groups[group.id] = group
        return group

    async def list_groups(self, user_id: int) -> list[Group]:
        self.calls.append("list_groups")
        self._check()
        mine = self.memberships.get(user_id, set())
        return [replace(g, is_member=g.id in mine) for g in self.groups.values()]

    async def list_groups_by_category(self, category: Category, user_id: int) -> list[Group]:
        self.calls.append("list_groups_by_category")
        self._check()
        return [g for g in self.groups.values() if g.category == category]

    async def list_my_groups(self, user_id: int) -> list[Group]:
        self.calls.append("list_my_groups")
        self._check()
        mine = self.memberships.get(user_id, set())
        return [g for g in self.groups.values() if g.id in mine]

    async def join_group(self, group_id: int, user_id: int, greeting: str = "") -> str:
        self.calls.append("join_group")
        self._check()
        self.memberships.setdefault(user_id, set()).add(group_id)
        return "Joined"

    async def leave_group(self, group_id: int, user_id: int) -> None:
        self.calls.append("leave_group")
        self._check()
        self.memberships.get(user_id, set()).discard(group_id)

    async def kick_member(self, group_id: int, leader_id: int, target_user_id: int) -> str:
        self.calls.append("kick_member")
        self._check()
        if self.reject_kick:
            raise RejectedError("Only the leader can remove members")
        detail = self.details[group_id]
        remaining = tuple(m.user_id for m in detail.members if m.user_id != target_user_id)
        self.details[group_id] = make_detail(group_id, remaining)
        return "Member removed"

    async def get_group_detail(self, group_id: int, user_id: int) -> GroupDetail:
        self.calls.append("get_group_detail")
        self._check()
        return self.details[group_id]


@dataclass
class FakePostRepository:
    posts: dict[int, PostDetail] = field(default_factory=dict)
    reject_delete: bool = False
    fail_transport: bool = False
    calls: list[str] = field(default_factory=list)
    _next_comment_id: int = 100

    def _check(self) -> None:
        if self.fail_transport:
            raise TransportError("offline")

    def add_post(self, post_id: int = 1, group_id: int = 1) -> PostDetail:
        detail = PostDetail(
            id=post_id,
            group_id=group_id,
            title="First post",
            content="content",
            post_type=PostType.FREE,
            author_nickname="alice",
            author_id=USER_ID,
            created_at=BASE_TIME,
            is_leader=False,
        )
        self.posts[post_id] = detail
        return detail

    @staticmethod
    def _summary(detail: PostDetail) -> Post:
        return Post(
            id=detail.id,
            group_id=detail.group_id,
            title=detail.title,
            content=detail.content,
            post_type=detail.post_type,
            author_nickname=detail.author_nickname,
            author_id=detail.author_id,
            created_at=detail.created_at,
            comment_count=len(detail.comments),
        )

    async def list_posts(self, group_id: int, post_type: PostType | None = None) -> list[Post]:
        self.calls.append("list_posts")
        self._check()
        return [
            self._summary(p)
            for p in self.posts.values()
            if p.group_id == group_id and (post_type is None or p.post_type == post_type)
        ]

    async def get_post_detail(self, post_id: int, user_id: int) -> PostDetail:
        self.calls.append("get_post_detail")
        self._check()
        return self.posts[post_id]

    async def create_post(self, group_id: int, user_id: int, dto: PostDraftDTO) -> str:
        self.calls.append("create_post")
        self._check()
        post_id = len(self.posts) + 1
        self.posts[post_id] = replace(
            self.add_post(post_id, group_id), title=dto.title, content=dto.content,
        )
        return "Post created"

    async def update_post(self, post_id: int, user_id: int, dto: PostDraftDTO) -> Post:
        self.calls.append("update_post")
        self._check()
        updated = replace(
            self.posts[post_id], title=dto.title, content=dto.content, post_type=dto.post_type,
        )
        self.posts[post_id] = updated
        return self._summary(updated)

    async def delete_post(self, post_id: int, user_id: int, group_id: int | None = None) -> str:
        self.calls.append("delete_post")
        self._check()
        if self.reject_delete:
            raise RejectedError("Not allowed to delete this post")
        del self.posts[post_id]
        return "Post deleted"

    async def create_comment(self, post_id: int, user_id: int, content: str) -> str:
        self.calls.append("create_comment")
        self._check()
        self._next_comment_id += 1
        detail = self.posts[post_id]
        comment = Comment(
            id=self._next_comment_id,
            content=content,
            author_nickname="alice",
            author_id=user_id,
            created_at=BASE_TIME,
        )
        self.posts[post_id] = replace(detail, comments=detail.comments + (comment,))
        return "Comment created"

    async def delete_comment(
        self, comment_id: int, user_id: int, group_id: int | None = None,
    ) -> str:
        self.calls.append("delete_comment")
        self._check()
        for post_id, detail in self.posts.items():
            kept = tuple(c for c in detail.comments if c.id != comment_id)
            self.posts[post_id] = replace(detail, comments=kept)
        return "Comment deleted"


@dataclass
class FakePhotoRepository:
    photos: list[Photo] = field(default_factory=list)
    reject_delete: bool = False
    calls: list[str] = field(default_factory=list)

    async def list_photos(self, group_id: int) -> list[Photo]:
        self.calls.append("list_photos")
        return [p for p in self.photos if p.group_id == group_id]

    async def upload_photo(
        self, group_id: int, user_id: int, image: Path, description: str | None,
    ) -> Photo:
        self.calls.append("upload_photo")
        photo = Photo(
            id=len(self.photos) + 1,
            group_id=group_id,
            uploader_id=user_id,
            uploader_nickname="alice",
            image_url=f"/uploads/{image.name}",
            original_filename=image.name,
            description=description,
            file_size=image.stat().st_size,
            created_at=BASE_TIME,
        )
        self.photos.append(photo)
        return photo

    async def delete_photo(self, photo_id: int, user_id: int, group_id: int | None = None) -> str:
        self.calls.append("delete_photo")
        if self.reject_delete:
            raise RejectedError("Not your photo")
        self.photos = [p for p in self.photos if p.id != photo_id]
        return "Photo deleted"


@dataclass
class FakeUserRepository:
    profile: UserProfile = field(
        default_factory=lambda: UserProfile(
            user_id=USER_ID,
            email="alice@example.com",
            name="Alice",
            nickname="alice",
            birth_date="2000-01-01",
            profile_image=None,
            bio=None,
            created_at=BASE_TIME,
            post_count=3,
            comment_count=5,
            photo_count=1,
            group_count=2,
        )
    )
    wrong_password: bool = False
    password_changes: list[ChangePasswordDTO] = field(default_factory=list)

    async def get_profile(self, user_id: int) -> UserProfile:
        return self.profile

    async def update_profile(self, user_id: int, dto: UpdateProfileDTO) -> AuthResult:
        self.profile = replace(self.profile, nickname=dto.nickname or self.profile.nickname, bio=dto.bio)
        return AuthResult(success=True, message="Profile updated")

    async def change_password(self, user_id: int, dto: ChangePasswordDTO) -> AuthResult:
        if self.wrong_password:
            raise RejectedError("Current password is incorrect")
        self.password_changes.append(dto)
        return AuthResult(success=True, message="Password changed")
