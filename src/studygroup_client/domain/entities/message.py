from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    conversation_id: int
    sender_id: int
    sender_display_name: str
    body: str
    created_at: datetime

    @property
    def order_key(self) -> tuple[datetime, int]:
        """Server timestamp first, id breaks ties."""
        return (self.created_at, self.id)
