"""Shared fixtures: configuration isolation."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from fallible.foundation.config import clear_settings_cache
from fallible.runtime.observability.logging import reset_logging


@pytest.fixture
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Strip FALLIBLE_ env vars and reset cached settings and logging around a test."""
    for key in list(os.environ):
        if key.startswith("FALLIBLE_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    reset_logging()
    yield monkeypatch
    clear_settings_cache()
    reset_logging()
