"""Polling synchronization of one group chat.

The controller performs a full fetch on ``start`` and then, while polling,
asks every ``poll_interval`` seconds for messages newer than the cursor.
Responses are applied in arrival order; a response issued before the most
recent ``start``/``close`` (or, for ticks, before ``stop_polling``) is
discarded.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Iterable

from studygroup_client.application.exceptions import AppError
from studygroup_client.application.projector import error_reason
from studygroup_client.application.repositories.chat import ChatRepository
from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import (
    LOADING,
    Error,
    RequestState,
    StateHolder,
    Success,
)
from studygroup_client.application.validation import require_text
from studygroup_client.config import settings
from studygroup_client.domain.entities.message import Message
from studygroup_client.sync.conversation import ConversationState

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load messages"
SEND_FAILED = "Failed to send message"


class ChatSyncController:
    """Owns the message log of one open chat screen."""

    def __init__(
        self,
        repository: ChatRepository,
        session: SessionContext,
        *,
        poll_interval: float | None = None,
    ) -> None:
        self._repository = repository
        self._session = session
        self._poll_interval = (
            settings.CHAT_POLL_INTERVAL if poll_interval is None else poll_interval
        )
        self.messages_state: StateHolder[tuple[Message, ...]] = StateHolder(name="chat.messages")
        self._conversation: ConversationState | None = None
        # Bumped by start()/close(); responses from older generations are stale.
        self._generation = 0
        # Bumped by begin_polling()/stop_polling(); same rule for poll ticks.
        self._poll_epoch = 0
        self._poll_conversation_id: int | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._tick_task: asyncio.Task[None] | None = None
        self._tick_in_flight = False

    @property
    def conversation(self) -> ConversationState | None:
        return self._conversation

    @property
    def last_seen(self) -> datetime | None:
        return self._conversation.last_seen if self._conversation else None

    @property
    def is_polling(self) -> bool:
        return self._poll_conversation_id is not None

    @property
    def is_empty(self) -> bool:
        """Loaded successfully and there is nothing to show yet."""
        state = self.messages_state.value
        return isinstance(state, Success) and not state.value

    async def start(self, conversation_id: int) -> RequestState[tuple[Message, ...]]:
        self._generation += 1
        generation = self._generation
        if not self.messages_state.is_loading:
            self.messages_state.set(LOADING)

        result: RequestState[tuple[Message, ...]]
        try:
            history = await self._repository.list_messages(conversation_id)
        except AppError as exc:
            logger.info("Loading messages of group %d failed: %s", conversation_id, exc.detail)
            result = Error(error_reason(exc, LOAD_FAILED))
            conversation = None
        except Exception as exc:
            logger.exception("Loading messages of group %d raised", conversation_id)
            result = Error(error_reason(exc, LOAD_FAILED))
            conversation = None
        else:
            conversation = ConversationState.from_history(conversation_id, history)
            result = Success(conversation.messages)

        if generation != self._generation:
            logger.debug("Discarding stale history for group %d", conversation_id)
            return result
        if conversation is not None:
            self._conversation = conversation
        self.messages_state.set(result)
        return result

    def begin_polling(self, conversation_id: int) -> None:
        """Start the repeating tick; replaces any timer already running."""
        self._cancel_poll_task()
        self._poll_epoch += 1
        self._poll_conversation_id = conversation_id
        self._poll_task = asyncio.create_task(
            self._poll_loop(self._poll_epoch),
            name=f"chat-poll-{conversation_id}",
        )
        logger.debug(
            "Polling group %d every %.1fs", conversation_id, self._poll_interval,
        )

    async def stop_polling(self) -> None:
        """Cancel the timer. A fetch already issued completes and is discarded."""
        self._poll_epoch += 1
        self._poll_conversation_id = None
        task = self._cancel_poll_task()
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Polling stopped")

    async def close(self) -> None:
        """Tear down: stop polling and discard every in-flight response."""
        self._generation += 1
        await self.stop_polling()

    @asynccontextmanager
    async def open(self, conversation_id: int) -> AsyncIterator[ChatSyncController]:
        """Load the conversation and poll it for the lifetime of the block."""
        try:
            await self.start(conversation_id)
            self.begin_polling(conversation_id)
            yield self
        finally:
            await self.close()

    async def tick(self) -> None:
        """One poll: fetch messages newer than the cursor and merge them."""
        conversation_id = self._poll_conversation_id
        if conversation_id is None:
            return
        if self._tick_in_flight:
            logger.debug("Previous poll still in flight, skipping tick")
            return
        conversation = self._conversation
        if (
            conversation is None
            or conversation.conversation_id != conversation_id
            or conversation.last_seen is None
        ):
            return

        generation, epoch = self._generation, self._poll_epoch
        self._tick_in_flight = True
        try:
            incoming = await self._repository.list_messages_after(
                conversation_id, conversation.last_seen,
            )
        except Exception:
            logger.debug("Poll tick for group %d failed", conversation_id, exc_info=True)
            return
        finally:
            self._tick_in_flight = False

        if generation != self._generation or epoch != self._poll_epoch:
            logger.debug("Discarding stale poll result for group %d", conversation_id)
            return
        if incoming:
            self._apply(conversation_id, incoming)

    async def send(self, conversation_id: int, body: str) -> RequestState[Message]:
        """Post a message; it appears in the log only once the server confirms it."""
        try:
            content = require_text(body, "Message")
            user_id = self._session.require_user_id()
        except AppError as exc:
            return Error(exc.detail)

        generation = self._generation
        try:
            message = await self._repository.send_message(conversation_id, user_id, content)
        except AppError as exc:
            logger.info("Sending to group %d failed: %s", conversation_id, exc.detail)
            return Error(error_reason(exc, SEND_FAILED))
        except Exception as exc:
            logger.exception("Sending to group %d raised", conversation_id)
            return Error(error_reason(exc, SEND_FAILED))

        if generation == self._generation:
            self._apply(conversation_id, [message])
        return Success(message)

    def _apply(self, conversation_id: int, incoming: Iterable[Message]) -> None:
        conversation = self._conversation
        if (
            conversation is None
            or conversation.conversation_id != conversation_id
            or not isinstance(self.messages_state.value, Success)
        ):
            return
        updated = conversation.with_messages(incoming)
        if updated is conversation:
            return
        self._conversation = updated
        self.messages_state.set(Success(updated.messages))

    def _cancel_poll_task(self) -> asyncio.Task[None] | None:
        task, self._poll_task = self._poll_task, None
        if task is not None and not task.done():
            task.cancel()
        return task

    async def _poll_loop(self, epoch: int) -> None:
        while epoch == self._poll_epoch:
            await asyncio.sleep(self._poll_interval)
            if epoch != self._poll_epoch:
                break
            # Cancelling the timer must not cancel a request already issued;
            # its response is dropped by the epoch check in tick().
            self._tick_task = asyncio.create_task(self._guarded_tick())
            await asyncio.shield(self._tick_task)

    async def _guarded_tick(self) -> None:
        try:
            await self.tick()
        except Exception:
            logger.exception("Poll tick crashed")
