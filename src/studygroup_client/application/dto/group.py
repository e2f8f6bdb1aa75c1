from __future__ import annotations

from dataclasses import dataclass

from studygroup_client.domain.value_objects.enums import Category


@dataclass(frozen=True, slots=True)
class CreateGroupDTO:
    name: str
    description: str
    category: Category
    max_members: int
