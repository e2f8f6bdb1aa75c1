"""Identity of the logged-in user, shared by every view-model."""
from __future__ import annotations

import logging

from studygroup_client.application.exceptions import NotAuthenticatedError
from studygroup_client.application.ports.preferences import PreferenceStore

logger = logging.getLogger(__name__)

KEY_USER_ID = "user_id"
KEY_NICKNAME = "nickname"


class SessionContext:
    """Single-writer session state.

    Only ``login``, ``logout`` and ``update_nickname`` mutate it, and each
    writes through to the preference store. Everything else reads.
    """

    def __init__(self, store: PreferenceStore) -> None:
        self._store = store
        self._user_id = 0
        self._nickname = ""

    @classmethod
    async def restore(cls, store: PreferenceStore) -> SessionContext:
        session = cls(store)
        raw_id = await store.get(KEY_USER_ID)
        try:
            user_id = int(raw_id) if raw_id else 0
        except ValueError:
            logger.warning("Ignoring malformed stored user id %r", raw_id)
            user_id = 0
        if user_id > 0:
            session._user_id = user_id
            session._nickname = await store.get(KEY_NICKNAME) or ""
        logger.debug("Session restored: user_id=%d", session._user_id)
        return session

    @property
    def user_id(self) -> int:
        return self._user_id

    @property
    def nickname(self) -> str:
        return self._nickname

    @property
    def is_logged_in(self) -> bool:
        return self._user_id > 0

    def require_user_id(self) -> int:
        if not self.is_logged_in:
            raise NotAuthenticatedError("Login required")
        return self._user_id

    async def login(self, user_id: int, nickname: str) -> None:
        if user_id <= 0 or not nickname:
            raise ValueError("login requires a positive user id and a nickname")
        await self._store.put_many({KEY_USER_ID: str(user_id), KEY_NICKNAME: nickname})
        self._user_id = user_id
        self._nickname = nickname
        logger.info("Logged in as user_id=%d", user_id)

    async def logout(self) -> None:
        await self._store.clear()
        self._user_id = 0
        self._nickname = ""
        logger.info("Logged out")

    async def update_nickname(self, nickname: str) -> None:
        self.require_user_id()
        await self._store.put_many({KEY_NICKNAME: nickname})
        self._nickname = nickname
