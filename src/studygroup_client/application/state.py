"""Request states published by view-models and observed by the UI.

Every asynchronous operation owns one ``StateHolder`` whose value is one of
``Idle``, ``Loading``, ``Success`` or ``Error``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union, assert_never

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    pass


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Error:
    reason: str


RequestState = Union[Idle, Loading, Success[T], Error]

IDLE = Idle()
LOADING = Loading()


def fold(
    state: RequestState[T],
    *,
    idle: Callable[[], R],
    loading: Callable[[], R],
    success: Callable[[T], R],
    error: Callable[[str], R],
) -> R:
    """Exhaustive dispatch over the four variants."""
    match state:
        case Idle():
            return idle()
        case Loading():
            return loading()
        case Success(value=value):
            return success(value)
        case Error(reason=reason):
            return error(reason)
        case _:
            assert_never(state)


Listener = Callable[[Any], None]


class StateHolder(Generic[T]):
    """Observable holder for one operation's state.

    Listeners are called synchronously on every change; setting an equal
    value is a no-op.
    """

    def __init__(self, initial: RequestState[T] = IDLE, *, name: str = "") -> None:
        self._value: RequestState[T] = initial
        self._listeners: list[Listener] = []
        self._ticket = 0
        self.name = name

    @property
    def value(self) -> RequestState[T]:
        return self._value

    @property
    def is_loading(self) -> bool:
        return isinstance(self._value, Loading)

    def set(self, value: RequestState[T]) -> None:
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("State listener failed for %s", self.name or "state")

    def reset(self) -> None:
        self.set(IDLE)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def next_ticket(self) -> int:
        """Claim the right to publish the next terminal state."""
        self._ticket += 1
        return self._ticket

    def is_current(self, ticket: int) -> bool:
        return ticket == self._ticket

    def __repr__(self) -> str:
        return f"StateHolder({self.name!r}, {self._value!r})"
