"""Pytest configuration shared by every test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Keep a developer's local .env from leaking into test runs.
os.environ.setdefault("BT_ENV_FILE", str(Path(__file__).parent / "missing.env"))

from batch_translator.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure cached settings state never bleeds between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
