"""
Async HTTP client façade.

Adds base-URL configuration, bearer-token injection, platform transport
selection and a closed error taxonomy on top of httpx.
"""

from http_facade.exceptions import (
    BadRequestError,
    ErrorKind,
    ForbiddenError,
    HttpError,
    NetworkError,
    NotFoundError,
    RequestCancelledError,
    ServerError,
    UnauthorizedError,
    UnknownHttpError,
    UnsupportedPlatformError,
)
from http_facade.models import RequestOptions, Timeouts
from http_facade.core import CancelToken, TokenProvider
from http_facade.services import HttpClient
from http_facade.main import create_client

__all__ = [
    "BadRequestError",
    "CancelToken",
    "ErrorKind",
    "ForbiddenError",
    "HttpClient",
    "HttpError",
    "NetworkError",
    "NotFoundError",
    "RequestCancelledError",
    "RequestOptions",
    "ServerError",
    "Timeouts",
    "TokenProvider",
    "UnauthorizedError",
    "UnknownHttpError",
    "UnsupportedPlatformError",
    "create_client",
]
