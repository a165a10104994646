"""Export Pydantic models for convenience."""

from .common import (
    DEFAULT_TIMEOUT_SECONDS,
    FailureKind,
    RequestOptions,
    Timeouts,
    TransportFailure,
    decode_body,
    iter_causes,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "FailureKind",
    "RequestOptions",
    "Timeouts",
    "TransportFailure",
    "decode_body",
    "iter_causes",
]
