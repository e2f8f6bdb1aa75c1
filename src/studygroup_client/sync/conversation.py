"""Ordered, de-duplicated message log for one conversation."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

from studygroup_client.domain.entities.message import Message


def order_messages(messages: Iterable[Message]) -> tuple[Message, ...]:
    """Sort by (created_at, id) and keep the first occurrence of each id."""
    seen: set[int] = set()
    unique: list[Message] = []
    for msg in messages:
        if msg.id in seen:
            continue
        seen.add(msg.id)
        unique.append(msg)
    return tuple(sorted(unique, key=lambda m: m.order_key))


def merge_messages(
    existing: tuple[Message, ...],
    incoming: Iterable[Message],
) -> tuple[Message, ...]:
    """Append ``incoming`` to an ordered log.

    Ids already present are dropped. New messages that sort after the tail
    are appended as-is; anything older is placed by order key.
    """
    known = {m.id for m in existing}
    fresh = [m for m in order_messages(incoming) if m.id not in known]
    if not fresh:
        return existing
    if not existing or fresh[0].order_key >= existing[-1].order_key:
        return existing + tuple(fresh)
    return tuple(sorted(existing + tuple(fresh), key=lambda m: m.order_key))


@dataclass(frozen=True, slots=True)
class ConversationState:
    conversation_id: int
    messages: tuple[Message, ...] = field(default_factory=tuple)
    last_seen: datetime | None = None

    @classmethod
    def from_history(cls, conversation_id: int, history: Iterable[Message]) -> ConversationState:
        messages = order_messages(history)
        last_seen = messages[-1].created_at if messages else None
        return cls(conversation_id, messages, last_seen)

    def with_messages(self, incoming: Iterable[Message]) -> ConversationState:
        """Merge ``incoming``; the cursor only ever moves forward."""
        messages = merge_messages(self.messages, incoming)
        if messages is self.messages:
            return self
        newest = messages[-1].created_at
        last_seen = newest if self.last_seen is None else max(self.last_seen, newest)
        return replace(self, messages=messages, last_seen=last_seen)
