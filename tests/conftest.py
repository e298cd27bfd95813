"""
Shared fixtures for torkeys tests.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
from _torkeys_test_helpers import RFC8032_PUBLIC_KEY, RFC8032_SEED
from loguru import logger

from torkeys.settings import reset_settings


@pytest.fixture
def rfc8032_seed() -> bytes:
    return RFC8032_SEED


@pytest.fixture
def rfc8032_public_key() -> bytes:
    return RFC8032_PUBLIC_KEY


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point settings at an empty data dir and drop any TORKEYS_* env vars."""
    for name in list(os.environ):
        if name.upper().startswith("TORKEYS_"):
            monkeypatch.delenv(name)

    data_dir = tmp_path / ".torkeys"
    monkeypatch.setenv("TORKEYS_DATA_DIR", str(data_dir))
    reset_settings()
    yield data_dir
    reset_settings()


@pytest.fixture(autouse=True)
def restore_logger() -> Generator[None, None, None]:
    """CLI commands replace loguru sinks; put a plain stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
