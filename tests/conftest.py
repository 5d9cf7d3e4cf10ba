"""
Pytest fixtures for the consignment ledger test suite.

Provides:
- Structured logging configuration and log capture
- In-memory SQLite database sessions (one fresh database per test)
- A deterministic clock pinned to FIXED_NOW

Record factories live in tests/factories.py.
"""

import json
import logging
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from consignment_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from consignment_kernel.domain.clock import DeterministicClock
from consignment_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from tests.factories import FIXED_NOW


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture consignment_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            compute_ledger([], [])
            logs = captured_logs()
            assert any(r["message"] == "CONSIGNMENT_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("consignment_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh in-memory SQLite database with all tables created."""
    init_engine_from_url("sqlite://")
    create_tables()
    sess = get_session()
    try:
        yield sess
    finally:
        sess.close()
        drop_tables()
        reset_engine()


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)
