"""
Pytest configuration and fixtures for fitcoach tests.

This module provides shared fixtures for building FIT files and decoder
settings.
"""

import os
from datetime import datetime, timezone

import pytest

from fit_builder import FitBuilder, sample_activity
from fitcoach.config.settings import DecoderSettings, get_settings


START_TIME = datetime(2024, 5, 1, 6, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def start_time():
    """Activity start used by the sample files."""
    return START_TIME


@pytest.fixture
def builder():
    """Empty FIT builder with a 14-byte header."""
    return FitBuilder()


@pytest.fixture
def sample_fit_bytes(start_time):
    """Ten records, two laps, one session and one device_info."""
    return sample_activity(start_time, records=10, laps=2)


@pytest.fixture
def settings():
    """Decoder settings isolated from the process environment."""
    return DecoderSettings(_env_file=None)


@pytest.fixture
def strict_settings():
    """Decoder settings with strict CRC checking."""
    return DecoderSettings(_env_file=None, strict_crc=True)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove decoder-related variables from the environment."""
    for key in list(os.environ):
        if key.startswith("FIT_") or key in ("ENVIRONMENT", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
