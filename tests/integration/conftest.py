"""In-process StudyApp server used by the HTTP repository tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studygroup_client.infrastructure.http.client import ApiClient

T0 = datetime(2024, 5, 1, 9, 0, 0)


@dataclass
class ServerState:
    messages: list[dict] = field(default_factory=list)
    members: dict[int, list[int]] = field(default_factory=lambda: {1: [7, 42, 99]})
    comments: list[dict] = field(default_factory=list)
    photos: list[dict] = field(default_factory=list)
    requests: list[tuple[str, str, dict]] = field(default_factory=list)

    def add_message(self, message_id: int, seconds: int, content: str = "hi", group_id: int = 1) -> dict:
        message = {
            "messageId": message_id,
            "groupId": group_id,
            "userId": 7,
            "username": "leader",
            "content": content,
            "createdAt": (T0 + timedelta(seconds=seconds)).isoformat(),
        }
        self.messages.append(message)
        return message


def _reject(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


def build_app(state: ServerState) -> FastAPI:
    app = FastAPI()

    @app.middleware("http")
    async def record(request: Request, call_next):
        state.requests.append((request.method, request.url.path, dict(request.query_params)))
        return await call_next(request)

    @app.post("/api/auth/login")
    async def login(request: Request):
        body = await request.json()
        if body["password"] != "abc12345":
            return {"success": False, "message": "Wrong email or password"}
        return {"success": True, "message": "ok", "token": "t", "userId": 42, "nickname": "alice"}

    @app.post("/api/auth/signup")
    async def signup(request: Request):
        body = await request.json()
        if body["email"] == "dup@example.com":
            return _reject("Email already registered", 409)
        assert body["birthDate"]
        return {"success": True, "message": "Welcome!"}

    @app.get("/api/auth/check-nickname")
    async def check_nickname(nickname: str):
        if nickname == "taken":
            return {"success": False, "message": "Nickname in use"}
        return {"success": True, "message": "Nickname available"}

    @app.get("/api/groups/{group_id}/messages")
    async def messages(group_id: int):
        mine = [m for m in state.messages if m["groupId"] == group_id]
        return sorted(mine, key=lambda m: m["createdAt"], reverse=True)

    @app.get("/api/groups/{group_id}/messages/after")
    async def messages_after(group_id: int, after: datetime):
        return [
            m for m in state.messages
            if m["groupId"] == group_id and datetime.fromisoformat(m["createdAt"]) > after
        ]

    @app.post("/api/groups/{group_id}/messages")
    async def send_message(group_id: int, request: Request):
        body = await request.json()
        user_id = int(request.query_params["userId"])
        newest = max((int(m["messageId"]) for m in state.messages), default=0)
        message = state.add_message(newest + 1, 3600, body["content"], group_id)
        message["userId"] = user_id
        message["username"] = "alice"
        return message

    @app.post("/api/groups")
    async def create_group(request: Request):
        body = await request.json()
        return {
            "groupId": 5,
            "groupName": body["groupName"],
            "description": body["description"],
            "category": body["category"],
            "leaderId": int(request.query_params["userId"]),
            "leaderNickname": "alice",
            "maxMembers": body["maxMembers"],
            "currentMembers": 1,
            "createdAt": T0.isoformat(),
            "member": True,
        }

    def _group(group_id: int, category: str = "PROGRAMMING") -> dict:
        return {
            "groupId": group_id,
            "groupName": f"group {group_id}",
            "category": category,
            "leaderId": 7,
            "maxMembers": 10,
            "currentMembers": len(state.members.get(group_id, [])),
            "isMember": 42 in state.members.get(group_id, []),
        }

    @app.get("/api/groups")
    async def list_groups():
        return {"success": True, "groups": [_group(1), _group(2, "LANGUAGE")]}

    @app.get("/api/groups/category/{category}")
    async def list_by_category(category: str):
        if category == "HOBBY":
            return {"success": False, "message": "Category unavailable", "groups": []}
        return {"success": True, "groups": [_group(2, category)]}

    @app.post("/api/groups/{group_id}/join")
    async def join(group_id: int, request: Request):
        body = await request.json()
        state.members.setdefault(group_id, []).append(int(request.query_params["userId"]))
        return {"success": True, "message": f"Joined: {body['greeting']}"}

    @app.delete("/api/groups/{group_id}/members/{target}")
    async def kick(group_id: int, target: int, request: Request):
        if request.query_params.get("leaderId") != "7":
            return _reject("Only the leader can remove members", 403)
        state.members[group_id].remove(target)
        return {"success": True, "message": "Member removed"}

    @app.get("/api/groups/{group_id}/detail")
    async def detail(group_id: int):
        return {
            "groupId": group_id,
            "name": f"group {group_id}",
            "category": "PROGRAMMING",
            "currentMembers": len(state.members[group_id]),
            "maxMembers": 10,
            "joined": True,
            "leader": False,
            "members": [
                {"userId": uid, "nickname": f"user{uid}", "leader": uid == 7}
                for uid in state.members[group_id]
            ],
        }

    @app.get("/api/groups/{group_id}/posts")
    async def posts(group_id: int, request: Request):
        rows = [
            {"postId": 1, "groupId": group_id, "title": "Rules", "content": "be kind",
             "postType": "NOTICE", "username": "leader", "userId": 7, "commentCount": 1},
            {"postId": 2, "groupId": group_id, "title": "Hi", "content": "hello",
             "postType": "POLL", "username": "alice", "userId": 42},
        ]
        wanted = request.query_params.get("postType")
        return {"posts": [r for r in rows if wanted is None or r["postType"] == wanted]}

    @app.get("/api/posts/{post_id}")
    async def post_detail(post_id: int):
        return {
            "postId": post_id, "groupId": 1, "title": "Rules", "content": "be kind",
            "postType": "NOTICE", "username": "leader", "userId": 7,
            "comments": state.comments, "isLeader": True,
        }

    @app.post("/api/posts/{post_id}/comments")
    async def create_comment(post_id: int, request: Request):
        body = await request.json()
        state.comments.append({
            "commentId": len(state.comments) + 1,
            "content": body["content"],
            "username": "alice",
            "userId": int(request.query_params["userId"]),
        })
        return {"success": True, "message": "Comment created"}

    @app.delete("/api/posts/{post_id}")
    async def delete_post(post_id: int, request: Request):
        if request.query_params.get("groupId") is None:
            return {"success": False, "message": "Not allowed to delete this post"}
        return {"success": True, "message": "Post deleted"}

    @app.get("/api/groups/{group_id}/photos")
    async def photos(group_id: int):
        return state.photos

    @app.post("/api/groups/{group_id}/photos")
    async def upload(group_id: int, request: Request):
        form = await request.form()
        image = form["image"]
        content = await image.read()
        photo = {
            "photoId": len(state.photos) + 1,
            "groupId": group_id,
            "userId": int(request.query_params["userId"]),
            "username": "alice",
            "imageUrl": f"/uploads/{image.filename}",
            "originalFilename": image.filename,
            "description": form.get("description"),
            "fileSize": len(content),
        }
        state.photos.append(photo)
        return photo

    @app.get("/api/users/{user_id}/profile")
    async def profile(user_id: int):
        return {
            "userId": user_id, "email": "alice@example.com", "name": "Alice",
            "nickname": "alice", "birthDate": "2000-01-01", "postCount": 3,
            "commentCount": 4, "photoCount": 1, "groupCount": 2,
        }

    @app.put("/api/users/{user_id}/password")
    async def change_password(user_id: int, request: Request):
        body = await request.json()
        if body["currentPassword"] != "old12345":
            return {"success": False, "message": "Current password is incorrect"}
        return {"success": True, "message": "Password changed"}

    return app


@pytest.fixture
def server_state() -> ServerState:
    return ServerState()


@pytest_asyncio.fixture
async def api(server_state):
    transport = httpx.ASGITransport(app=build_app(server_state))
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver/api") as http:
        yield ApiClient(http_client=http)
