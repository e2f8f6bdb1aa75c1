from __future__ import annotations

from datetime import datetime
from typing import Protocol

from studygroup_client.domain.entities.message import Message


class ChatRepository(Protocol):
    async def list_messages(self, group_id: int) -> list[Message]:
        """Every message of the group, in whatever order the server sends."""
        ...

    async def list_messages_after(self, group_id: int, after: datetime) -> list[Message]:
        """Messages strictly newer than ``after``."""
        ...

    async def send_message(self, group_id: int, user_id: int, content: str) -> Message:
        """Return the message as stored by the server."""
        ...
