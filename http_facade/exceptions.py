"""Normalized error taxonomy surfaced by :class:`~http_facade.services.HttpClient`."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error kinds a caller needs to branch on."""

    NETWORK = "NETWORK"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    SERVER = "SERVER"
    UNKNOWN = "UNKNOWN"


class HttpError(Exception):
    """
    Base exception for every classified request failure.

    Catch this to handle any network-originated error generically, or one of
    the subclasses to react to a specific kind.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message = "An unknown error occurred"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = self.default_message if message is None else message
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class NetworkError(HttpError):
    """Timeouts, refused connections, TLS and socket-level failures."""

    kind = ErrorKind.NETWORK
    default_message = "A network error occurred"


class BadRequestError(HttpError):
    """Server answered 400."""

    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(HttpError):
    """Server answered 401."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(HttpError):
    """Server answered 403."""

    kind = ErrorKind.FORBIDDEN


class NotFoundError(HttpError):
    """Server answered 404."""

    kind = ErrorKind.NOT_FOUND


class ServerError(HttpError):
    """Server answered 5xx."""

    kind = ErrorKind.SERVER


class UnknownHttpError(HttpError):
    """Anything else, including cancelled requests."""

    kind = ErrorKind.UNKNOWN


class RequestCancelledError(Exception):
    """Raised when a request is aborted through its :class:`CancelToken`."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason or "Request cancelled")


class UnsupportedPlatformError(RuntimeError):
    """No transport implementation exists for the running platform."""
