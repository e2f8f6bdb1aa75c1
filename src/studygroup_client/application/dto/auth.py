from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SignupDTO:
    email: str
    password: str
    name: str
    nickname: str
    birth_date: str  # "2000-01-01"


@dataclass(frozen=True, slots=True)
class LoginDTO:
    email: str
    password: str
