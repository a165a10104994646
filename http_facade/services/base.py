"""Async HTTP client façade with bearer auth and normalized errors."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping, Sequence
from functools import lru_cache
from typing import Any, Protocol
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, TypeAdapter

from http_facade.core import BearerAuthHook, CancelToken, TokenProvider, classify_exception, raise_for_status
from http_facade.models import RequestOptions, Timeouts, decode_body

from .transport import select_transport

EventHook = Callable[..., Awaitable[Any]]
QueryParams = Mapping[str, Any] | Sequence[tuple[str, Any]]


class LoggerSink(Protocol):
    def info(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...


class HttpClient:
    """
    Reusable async HTTP client bound to one base URL.

    Every request passes through two mandatory stages: a request hook that
    attaches ``Authorization: Bearer <token>`` when ``token_provider`` yields a
    token, and a response hook that turns non-2xx responses into failures.
    Failures coming from the transport are converted to a single
    :class:`~http_facade.exceptions.HttpError` subclass; anything else
    propagates unchanged.

    Example:
        ```python
        async with HttpClient("https://api.example.com", get_token) as client:
            items = await client.fetch("/items", query={"page": 2})
        ```
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        *,
        timeouts: Timeouts | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        event_hooks: Mapping[str, Sequence[EventHook]] | None = None,
        logger: LoggerSink | None = None,
        platform: str | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Root every request path is resolved against
            token_provider: Async callable returning the current token or ``None``
            timeouts: ``Timeouts``, one value for all phases, or ``None`` for 15s each
            transport: Prebuilt transport; the platform default is used otherwise
            event_hooks: Extra ``{"request": [...], "response": [...]}`` hooks,
                run after the built-in ones
            logger: Sink for request lifecycle lines (``info``/``error``)
            platform: Overrides ``sys.platform`` when picking the transport
        """
        if not base_url:
            raise ValueError("base_url is required")

        hooks = dict(event_hooks or {})
        unknown = set(hooks) - {"request", "response"}
        if unknown:
            raise ValueError(f"Unsupported event hook types: {sorted(unknown)}")

        self.base_url = base_url.rstrip("/")
        self.timeouts = _resolve_timeouts(timeouts)
        self.logger: LoggerSink = logger or logging.getLogger(__name__)
        self.auth_hook = BearerAuthHook(token_provider)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeouts.as_httpx(),
            transport=transport or select_transport(platform),
            follow_redirects=True,
            event_hooks={
                "request": [self.auth_hook, *hooks.get("request", ())],
                "response": [raise_for_status, *hooks.get("response", ())],
            },
        )

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(
        self,
        path: str,
        *,
        query: QueryParams | None = None,
        options: RequestOptions | None = None,
        cancel: CancelToken | None = None,
        response_model: Any = None,
    ) -> Any:
        """GET ``path`` and return the decoded body."""

        return await self.request(
            "GET", path, query=query, options=options, cancel=cancel, response_model=response_model
        )

    async def create(
        self,
        path: str,
        body: Any = None,
        *,
        query: QueryParams | None = None,
        options: RequestOptions | None = None,
        cancel: CancelToken | None = None,
        response_model: Any = None,
    ) -> Any:
        """POST ``body`` to ``path``."""

        return await self.request(
            "POST",
            path,
            body=body,
            query=query,
            options=options,
            cancel=cancel,
            response_model=response_model,
        )

    async def replace(
        self,
        path: str,
        body: Any = None,
        *,
        query: QueryParams | None = None,
        options: RequestOptions | None = None,
        cancel: CancelToken | None = None,
        response_model: Any = None,
    ) -> Any:
        """PUT ``body`` to ``path``."""

        return await self.request(
            "PUT",
            path,
            body=body,
            query=query,
            options=options,
            cancel=cancel,
            response_model=response_model,
        )

    async def remove(
        self,
        path: str,
        body: Any = None,
        *,
        query: QueryParams | None = None,
        options: RequestOptions | None = None,
        cancel: CancelToken | None = None,
        response_model: Any = None,
    ) -> Any:
        """DELETE ``path``, optionally with a body."""

        return await self.request(
            "DELETE",
            path,
            body=body,
            query=query,
            options=options,
            cancel=cancel,
            response_model=response_model,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: QueryParams | None = None,
        options: RequestOptions | None = None,
        cancel: CancelToken | None = None,
        response_model: Any = None,
    ) -> Any:
        """
        Send one request and return its body.

        Args:
            method: HTTP verb
            path: Path relative to ``base_url``
            body: ``bytes``/``str`` sent as-is, pydantic models and other values as JSON
            query: Mapping (list values repeat the key) or ordered ``(key, value)``
                pairs; sent in the given order
            options: Per-call overrides
            cancel: Token aborting the request when signalled
            response_model: Type the decoded body is validated against

        Returns:
            Decoded body (JSON, text or ``None``), validated when ``response_model`` is given

        Raises:
            HttpError: Subclass matching the transport failure or error status
            ValueError: If ``path`` is empty
            pydantic.ValidationError: If the body does not fit ``response_model``
        """
        if not path:
            raise ValueError("path must be a non-empty string")

        method = method.upper()
        if body is None:
            self.logger.info("%s request to: %s, Query Parameters: %s", method, path, query)
        else:
            self.logger.info(
                "%s request to: %s, Query Parameters: %s, Data: %s", method, path, query, body
            )

        kwargs = _body_kwargs(body)
        if options is not None:
            kwargs.update(options.as_request_kwargs())

        url = path if query is None else _with_query(path, query)
        send = self._client.request(method, url, **kwargs)
        try:
            response = await (cancel.run(send) if cancel is not None else send)
            response.raise_for_status()
        except Exception as exc:
            error = classify_exception(exc)
            if error is None:
                self.logger.error(
                    "%s request to %s failed with %s: %s", method, path, type(exc).__name__, exc
                )
                raise
            self.logger.error(
                "%s request to %s failed with %s: %s", method, path, type(error).__name__, error
            )
            raise error from exc

        self.logger.info("%s request to %s successful. Status: %s", method, path, response.status_code)
        data = decode_body(response)
        if response_model is None:
            return data
        return _type_adapter(response_model).validate_python(data)


def _resolve_timeouts(timeouts: Timeouts | float | None) -> Timeouts:
    if timeouts is None:
        return Timeouts()
    if isinstance(timeouts, Timeouts):
        return timeouts
    return Timeouts.uniform(timeouts)


def _with_query(path: str, query: QueryParams) -> str:
    # httpx.QueryParams groups repeated keys, so pairs are encoded here in order.
    encoded = urlencode(list(_query_pairs(query)))
    if not encoded:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{encoded}"


def _query_pairs(query: QueryParams) -> Iterator[tuple[str, str]]:
    items = query.items() if isinstance(query, Mapping) else query
    for key, value in items:
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            yield str(key), _query_value(item)


def _query_value(value: Any) -> str:
    # Same primitive rendering as httpx.
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return ""
    return str(value)


def _body_kwargs(body: Any) -> dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, (bytes, str)):
        return {"content": body}
    if isinstance(body, BaseModel):
        return {"json": body.model_dump(mode="json")}
    return {"json": body}


@lru_cache(maxsize=128)
def _type_adapter(response_model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_model)
