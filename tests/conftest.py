"""
Test Configuration and Fixtures

Environment variables are set before any application module is imported,
since settings and the loguru sinks are built at import time.

Architecture:
- Unit tests (tests/**/unit/): repositories replaced by AsyncMock or the in-memory store
- API tests (tests/**/api/): FastAPI TestClient, DI container overridden with in-memory repos
- Integration tests (tests/**/integration/): real PostgreSQL, schema rebuilt once, tables truncated per test
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    os.environ['POSTGRES_DB'] = 'flight_booking_test_db'
    os.environ['BOOKING_OPERATION_TIMEOUT_SECONDS'] = '5'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

import pytest  # noqa: E402

from src.service.booking.domain.entity.flight_entity import Flight  # noqa: E402
from tests.service.booking.fixtures import build_flight  # noqa: E402
from tests.service.booking.in_memory import InMemoryStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def flight(store: InMemoryStore) -> Flight:
    """Reference flight (E1 $100, E2 $100, B1 $300) seeded into the in-memory store"""
    return store.add_flight(build_flight())
