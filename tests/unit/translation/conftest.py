"""Shared fixtures for translator tests."""

import pytest

from batch_translator.metrics import InMemoryMetricRegistry

from .helpers import CaptureLogger


@pytest.fixture
def registry() -> InMemoryMetricRegistry:
    return InMemoryMetricRegistry()


@pytest.fixture
def capture_logger() -> CaptureLogger:
    return CaptureLogger()
