from __future__ import annotations

from datetime import datetime

from studygroup_client.infrastructure.http.schemas.common import WireModel


class SendMessageRequest(WireModel):
    content: str


class MessageResponse(WireModel):
    message_id: int
    group_id: int
    user_id: int
    username: str = ""
    content: str
    created_at: datetime
