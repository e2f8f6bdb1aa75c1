"""Key-value preference storage on a local SQLite file."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from studygroup_client.config import settings
from studygroup_client.infrastructure.preferences.models import Base, PreferenceModel

logger = logging.getLogger(__name__)


class SqlAlchemyPreferenceStore:
    """Implements application.ports.preferences.PreferenceStore.

    The table is created on first use.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._schema_ready = False

    @classmethod
    def from_url(cls, url: str | None = None) -> SqlAlchemyPreferenceStore:
        return cls(create_async_engine(url or settings.PREFERENCES_DB_URL))

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True

    async def get(self, key: str) -> str | None:
        await self._ensure_schema()
        async with self._session_factory() as session:
            return await session.scalar(
                select(PreferenceModel.value).where(PreferenceModel.key == key)
            )

    async def put_many(self, values: dict[str, str]) -> None:
        await self._ensure_schema()
        async with self._session_factory.begin() as session:
            for key, value in values.items():
                await session.merge(PreferenceModel(key=key, value=value))
        logger.debug("Stored preferences: %s", sorted(values))

    async def clear(self) -> None:
        await self._ensure_schema()
        async with self._session_factory.begin() as session:
            await session.execute(delete(PreferenceModel))

    async def dispose(self) -> None:
        await self._engine.dispose()
