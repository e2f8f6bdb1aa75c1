from __future__ import annotations

from studygroup_client.domain.entities.message import Message
from studygroup_client.infrastructure.http.schemas.message import MessageResponse


def schema_to_entity(schema: MessageResponse) -> Message:
    return Message(
        id=schema.message_id,
        conversation_id=schema.group_id,
        sender_id=schema.user_id,
        sender_display_name=schema.username,
        body=schema.content,
        created_at=schema.created_at,
    )
