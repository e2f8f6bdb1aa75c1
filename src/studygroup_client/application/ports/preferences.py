from __future__ import annotations

from typing import Protocol


class PreferenceStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def put_many(self, values: dict[str, str]) -> None: ...

    async def clear(self) -> None: ...
