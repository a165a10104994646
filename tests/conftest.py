"""Shared fixtures."""

from __future__ import annotations

import pytest

from tests.helpers import RecordingLogger


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
