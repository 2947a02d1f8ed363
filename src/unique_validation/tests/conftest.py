"""
Core pytest configuration for the test suite.

Only session-wide concerns live here (logging, import path). Domain fixtures
are in tests/test_fixtures/ and re-exported below so every test module can use
them without importing.
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block before the project imports so noisy libraries are quiet during collection.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "pymongo",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# Ensure 'src' is importable when the package is not installed
SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from unique_validation.config.settings import Settings
from unique_validation.core.logging.builder import setup_logging


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the package's logging configuration once for the whole session.

    pytest's caplog handler is attached per test on top of this, so
    caplog.records keeps working.
    """
    setup_logging(Settings(ENV="testing", LOG_LEVEL="DEBUG", LOG_FORMAT="text", LOG_TO_STDOUT=True))
    yield


# Repository / plugin fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    fake_database,
    legacy_database,
    index_cache,
    make_repository,
    fake,
    sample_person,
)
