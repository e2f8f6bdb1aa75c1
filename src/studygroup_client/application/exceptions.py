from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class TransportError(AppError):
    """No connectivity, timeout, non-2xx status or an unreadable body."""

    def __init__(self, detail: str = "", *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(detail)


class RejectedError(AppError):
    """The server answered but declared the operation failed (success=false)."""


class ValidationError(AppError):
    pass


class NotAuthenticatedError(AppError):
    pass
