"""Logging setup for applications embedding the HTTP client."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Transport libraries that would repeat the request lines HttpClient emits.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    quiet_loggers: Iterable[str] = TRANSPORT_LOGGERS,
) -> None:
    """
    Route log records to stderr and, when ``log_file`` is given, to that file.

    Loggers named in ``quiet_loggers`` are capped at WARNING.
    """

    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    logging.basicConfig(level=resolved, format=LOG_FORMAT, handlers=handlers, force=True)
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
