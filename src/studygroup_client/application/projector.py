"""Result-State Projector: maps one awaited operation onto a StateHolder."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from studygroup_client.application.exceptions import (
    AppError,
    RejectedError,
    TransportError,
)
from studygroup_client.application.state import (
    LOADING,
    Error,
    RequestState,
    StateHolder,
    Success,
)
from studygroup_client.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_reason(exc: BaseException, fallback: str) -> str:
    """Message shown to the user for a failed operation."""
    if isinstance(exc, RejectedError):
        return exc.detail or fallback
    if isinstance(exc, TransportError):
        return settings.NETWORK_ERROR_MESSAGE
    if isinstance(exc, AppError):
        return exc.detail or fallback
    return str(exc) or fallback


async def project(
    holder: StateHolder[T],
    operation: Callable[[], Awaitable[T]],
    *,
    fallback: str,
) -> RequestState[T]:
    """Publish Loading, await ``operation``, publish Success or Error.

    Only the most recent invocation on a holder may publish its outcome;
    an older one that finishes late returns its result without touching
    the holder.
    """
    ticket = holder.next_ticket()
    if not holder.is_loading:
        holder.set(LOADING)

    result: RequestState[T]
    try:
        value = await operation()
    except AppError as exc:
        logger.info("%s failed: %s", holder.name or "operation", exc.detail or type(exc).__name__)
        result = Error(error_reason(exc, fallback))
    except Exception as exc:
        logger.exception("%s raised unexpectedly", holder.name or "operation")
        result = Error(error_reason(exc, fallback))
    else:
        result = Success(value)

    if holder.is_current(ticket):
        holder.set(result)
    else:
        logger.debug("Discarding stale result for %s", holder.name or "operation")
    return result


def fail_fast(holder: StateHolder[T], exc: AppError) -> RequestState[T]:
    """Publish a client-side validation failure without touching the network."""
    holder.next_ticket()
    result: RequestState[T] = Error(exc.detail)
    holder.set(result)
    return result
