from __future__ import annotations

from datetime import datetime

from studygroup_client.domain.entities.message import Message
from studygroup_client.infrastructure.http.client import ApiClient, decode, decode_list
from studygroup_client.infrastructure.http.mappers import message as mapper
from studygroup_client.infrastructure.http.schemas.message import (
    MessageResponse,
    SendMessageRequest,
)


class HttpChatRepository:
    """Implements application.repositories.chat.ChatRepository."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list_messages(self, group_id: int) -> list[Message]:
        payload = await self._api.get(f"/groups/{group_id}/messages")
        return [mapper.schema_to_entity(m) for m in decode_list(MessageResponse, payload or [])]

    async def list_messages_after(self, group_id: int, after: datetime) -> list[Message]:
        payload = await self._api.get(
            f"/groups/{group_id}/messages/after",
            params={"after": after.isoformat()},
        )
        return [mapper.schema_to_entity(m) for m in decode_list(MessageResponse, payload or [])]

    async def send_message(self, group_id: int, user_id: int, content: str) -> Message:
        payload = await self._api.post(
            f"/groups/{group_id}/messages",
            params={"userId": user_id},
            json=SendMessageRequest(content=content).to_wire(),
        )
        return mapper.schema_to_entity(decode(MessageResponse, payload))
