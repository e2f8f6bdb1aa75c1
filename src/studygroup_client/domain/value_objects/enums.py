from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    PROGRAMMING = "PROGRAMMING"
    LANGUAGE = "LANGUAGE"
    CERTIFICATION = "CERTIFICATION"
    HOBBY = "HOBBY"
    EXERCISE = "EXERCISE"
    ETC = "ETC"


class PostType(StrEnum):
    FREE = "FREE"
    NOTICE = "NOTICE"

    @classmethod
    def parse(cls, value: str) -> PostType:
        """Unknown or differently-cased values fall back to FREE."""
        try:
            return cls(value.upper())
        except ValueError:
            return cls.FREE
