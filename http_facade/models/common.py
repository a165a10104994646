"""Common Pydantic models shared across modules."""

from __future__ import annotations

import ssl
from enum import Enum
from typing import Any, Iterator

import httpx
from pydantic import BaseModel, Field, PositiveFloat

from http_facade.exceptions import RequestCancelledError

DEFAULT_TIMEOUT_SECONDS = 15.0


class Timeouts(BaseModel):
    """Per-request connect/receive/send limits, in seconds."""

    model_config = {"frozen": True}

    connect: PositiveFloat = DEFAULT_TIMEOUT_SECONDS
    receive: PositiveFloat = DEFAULT_TIMEOUT_SECONDS
    send: PositiveFloat = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def uniform(cls, seconds: float) -> Timeouts:
        """Use the same limit for all three phases."""

        return cls(connect=seconds, receive=seconds, send=seconds)

    def as_httpx(self) -> httpx.Timeout:
        # Waiting for a pooled connection counts as connecting.
        return httpx.Timeout(
            connect=self.connect,
            read=self.receive,
            write=self.send,
            pool=self.connect,
        )


class RequestOptions(BaseModel):
    """Per-call overrides forwarded to httpx."""

    model_config = {"frozen": True}

    headers: dict[str, str] | None = None
    timeout: PositiveFloat | Timeouts | None = None
    follow_redirects: bool | None = None
    extensions: dict[str, Any] | None = None

    def as_request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.headers is not None:
            kwargs["headers"] = dict(self.headers)
        if isinstance(self.timeout, Timeouts):
            kwargs["timeout"] = self.timeout.as_httpx()
        elif self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.follow_redirects is not None:
            kwargs["follow_redirects"] = self.follow_redirects
        if self.extensions is not None:
            kwargs["extensions"] = dict(self.extensions)
        return kwargs


class FailureKind(str, Enum):
    """Categories a transport failure falls into."""

    CONNECT_TIMEOUT = "CONNECT_TIMEOUT"
    SEND_TIMEOUT = "SEND_TIMEOUT"
    RECEIVE_TIMEOUT = "RECEIVE_TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    BAD_CERTIFICATE = "BAD_CERTIFICATE"
    BAD_RESPONSE = "BAD_RESPONSE"
    CANCEL = "CANCEL"
    UNKNOWN = "UNKNOWN"


def iter_causes(exc: BaseException | None) -> Iterator[BaseException]:
    """Yield ``exc`` followed by its explicit and implicit causes."""

    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def decode_body(response: httpx.Response) -> Any:
    """
    Return the response body as JSON for JSON content types, else text.

    Empty bodies decode to ``None``; a malformed JSON body is returned as text.
    """

    if not response.content:
        return None
    if not is_json_content_type(response.headers.get("Content-Type")):
        return response.text
    try:
        return response.json()
    except ValueError:
        return response.text


class TransportFailure(BaseModel):
    """Single failed request, reduced to what classification needs."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    kind: FailureKind
    status_code: int | None = None
    body: Any = None
    message: str | None = None
    cause: BaseException | None = Field(default=None, repr=False)
    method: str | None = None
    url: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> TransportFailure | None:
        """Describe ``exc`` or return ``None`` when it is not a transport failure."""

        if isinstance(exc, RequestCancelledError):
            return cls(kind=FailureKind.CANCEL, message=str(exc), cause=exc)
        if not isinstance(exc, httpx.HTTPError):
            return None

        method, url = _request_line(exc)
        common: dict[str, Any] = {
            "message": str(exc) or None,
            "cause": exc,
            "method": method,
            "url": url,
        }

        if isinstance(exc, httpx.HTTPStatusError):
            return cls(
                kind=FailureKind.BAD_RESPONSE,
                status_code=exc.response.status_code,
                body=decode_body(exc.response),
                **common,
            )
        if isinstance(exc, (httpx.ConnectTimeout, httpx.PoolTimeout)):
            return cls(kind=FailureKind.CONNECT_TIMEOUT, **common)
        if isinstance(exc, httpx.WriteTimeout):
            return cls(kind=FailureKind.SEND_TIMEOUT, **common)
        if isinstance(exc, httpx.ReadTimeout):
            return cls(kind=FailureKind.RECEIVE_TIMEOUT, **common)
        if isinstance(exc, httpx.ConnectError):
            if any(isinstance(cause, ssl.SSLError) for cause in iter_causes(exc)):
                return cls(kind=FailureKind.BAD_CERTIFICATE, **common)
            return cls(kind=FailureKind.CONNECTION_ERROR, **common)
        return cls(kind=FailureKind.UNKNOWN, **common)


def _request_line(exc: httpx.HTTPError) -> tuple[str | None, str | None]:
    try:
        request = exc.request
    except RuntimeError:
        # Raised by httpx when the exception was built without a request.
        return None, None
    return request.method, str(request.url)
