"""Core building blocks."""

from .auth import BearerAuthHook, TokenProvider
from .cancellation import CancelToken
from .classifier import classify, classify_exception, extract_message, raise_for_status

__all__ = [
    "BearerAuthHook",
    "CancelToken",
    "TokenProvider",
    "classify",
    "classify_exception",
    "extract_message",
    "raise_for_status",
]
