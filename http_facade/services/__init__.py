"""Public client exports."""

from .base import HttpClient, LoggerSink
from .transport import FetchTransport, select_transport

__all__ = [
    "FetchTransport",
    "HttpClient",
    "LoggerSink",
    "select_transport",
]
