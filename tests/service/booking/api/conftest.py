"""
API test configuration

The real app factory and routers are used; only the persistence providers of
the DI container are swapped for the in-memory store, and the lifespan skips
database setup.
"""

from collections.abc import AsyncIterator, Generator
from contextlib import asynccontextmanager
from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.service.booking.domain.enum.user_role import UserRole
from src.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from tests.service.booking.fixtures import ADMIN_ID, ANOTHER_USER_ID, USER_ID
from tests.service.booking.in_memory import (
    InMemoryBookingQueryRepo,
    InMemoryFlightQueryRepo,
    InMemoryStore,
    InMemoryUnitOfWork,
)


@asynccontextmanager
async def _test_lifespan(app: FastAPI) -> AsyncIterator[None]:
    container.wire(modules=WIRE_MODULES)
    yield
    container.unwire()


@pytest.fixture
def client(store: InMemoryStore) -> Generator[TestClient, None, None]:
    with (
        container.unit_of_work.override(providers.Factory(InMemoryUnitOfWork, store=store)),
        container.flight_query_repo.override(providers.Object(InMemoryFlightQueryRepo(store))),
        container.booking_query_repo.override(providers.Object(InMemoryBookingQueryRepo(store))),
    ):
        app = create_app(lifespan=_test_lifespan, title_suffix=' (Test)')
        with TestClient(app) as test_client:
            yield test_client


def _bearer(user_id: int, role: UserRole) -> dict[str, str]:
    token = JwtAuth().create_jwt_token(user_id=user_id, role=role)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return _bearer(USER_ID, UserRole.USER)


@pytest.fixture
def another_user_headers() -> dict[str, str]:
    return _bearer(ANOTHER_USER_ID, UserRole.USER)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return _bearer(ADMIN_ID, UserRole.ADMIN)
