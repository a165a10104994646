"""Maps failed requests onto the :mod:`http_facade.exceptions` taxonomy."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from http_facade.exceptions import (
    BadRequestError,
    ForbiddenError,
    HttpError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnknownHttpError,
)
from http_facade.models import FailureKind, TransportFailure, iter_causes

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
CANCELLED_MESSAGE = "Request cancelled"

_NETWORK_KINDS = frozenset(
    {
        FailureKind.CONNECT_TIMEOUT,
        FailureKind.SEND_TIMEOUT,
        FailureKind.RECEIVE_TIMEOUT,
        FailureKind.CONNECTION_ERROR,
        FailureKind.BAD_CERTIFICATE,
    }
)

_STATUS_ERRORS: dict[int, type[HttpError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


async def raise_for_status(response: httpx.Response) -> None:
    """
    Response hook sending every non-2xx response down the error path.

    httpx runs response hooks on each hop of a redirect chain, so responses
    carrying a ``Location`` are let through; one left unfollowed is rejected
    by :meth:`HttpClient.request` once the chain ends.
    """

    if response.is_success or response.has_redirect_location:
        return
    # Body must be loaded before the hook raises so the classifier can read it.
    await response.aread()
    response.raise_for_status()


def extract_message(body: Any) -> str | None:
    """
    Pull a human readable message out of an error body.

    Recognised shapes, first match wins::

        {"error": {"message": "..."}}
        {"message": "..."}
        {"error": "..."}
        {"detail": "..."}
        "..."
    """

    if isinstance(body, str):
        return body
    if not isinstance(body, Mapping):
        return None

    error = body.get("error")
    if isinstance(error, Mapping) and isinstance(error.get("message"), str):
        return error["message"]
    for key in ("message", "error", "detail"):
        value = body.get(key)
        if isinstance(value, str):
            return value
    return None


def classify(failure: TransportFailure) -> HttpError:
    """Return the error for ``failure``; pure and deterministic."""

    kind = failure.kind

    if kind in _NETWORK_KINDS:
        return NetworkError(failure.message)

    if kind == FailureKind.BAD_RESPONSE:
        return _classify_status(failure)

    if kind == FailureKind.CANCEL:
        return UnknownHttpError(CANCELLED_MESSAGE)

    if _is_socket_fault(failure.cause):
        return NetworkError(failure.message)
    return UnknownHttpError(failure.message or "An unknown error occurred")


def classify_exception(exc: BaseException) -> HttpError | None:
    """Classify ``exc``; ``None`` means it did not come from the transport."""

    failure = TransportFailure.from_exception(exc)
    if failure is None:
        return None
    return classify(failure)


def _classify_status(failure: TransportFailure) -> HttpError:
    status = failure.status_code
    message = extract_message(failure.body)
    if message is None:
        message = UNKNOWN_ERROR_MESSAGE if failure.message is None else failure.message

    if status is None:
        return UnknownHttpError(f"Received response with null status code. Message: {message}")

    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is not None:
        return error_cls(message, status_code=status)
    if status >= 500:
        return ServerError(message, status_code=status)
    return UnknownHttpError(
        f"Received invalid status code: {status}. Message: {message}",
        status_code=status,
    )


def _is_socket_fault(cause: BaseException | None) -> bool:
    for exc in iter_causes(cause):
        if isinstance(exc, (httpx.NetworkError, OSError)):
            return True
    return False
