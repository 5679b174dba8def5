"""
Integration fixtures: real PostgreSQL through SqlAlchemyUnitOfWork

- The test database (POSTGRES_DB from tests/conftest.py) is created if missing
  and its tables rebuilt from the models once per session
- Every test starts from empty tables
- Tests here are skipped when no PostgreSQL server is reachable
"""

from typing import AsyncGenerator, Callable, Optional

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Base
from src.platform.database.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork
import src.service.booking.driven_adapter.model  # noqa: F401
from src.service.booking.domain.entity.flight_entity import Flight
from tests.service.booking.fixtures import build_flight


_schema_ready = False
_unavailable_reason: Optional[str] = None


def _server_url() -> str:
    return settings.DATABASE_URL_ASYNC.rsplit('/', 1)[0] + '/postgres'


async def _setup_test_database() -> None:
    global _schema_ready, _unavailable_reason
    if _schema_ready:
        return
    if _unavailable_reason:
        pytest.skip(_unavailable_reason)

    engine = create_async_engine(_server_url(), isolation_level='AUTOCOMMIT')
    try:
        async with engine.connect() as conn:
            exists = await conn.scalar(
                text('SELECT 1 FROM pg_database WHERE datname = :name'),
                {'name': settings.POSTGRES_DB},
            )
            if not exists:
                await conn.execute(text(f'CREATE DATABASE "{settings.POSTGRES_DB}"'))
    except (OSError, DBAPIError) as e:
        _unavailable_reason = f'PostgreSQL not reachable at {settings.POSTGRES_SERVER}: {e}'
        pytest.skip(_unavailable_reason)
    finally:
        await engine.dispose()

    reset_engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    async with reset_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await reset_engine.dispose()
    _schema_ready = True


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    await _setup_test_database()

    engine = create_async_engine(settings.DATABASE_URL_ASYNC, pool_size=5, max_overflow=5)
    async with engine.begin() as conn:
        await conn.execute(text('TRUNCATE booking, seat, flight RESTART IDENTITY CASCADE'))
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def uow_factory(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[[], AbstractUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(session_maker=session_maker)


@pytest.fixture
async def pg_flight(uow_factory: Callable[[], AbstractUnitOfWork]) -> Flight:
    """Reference flight (E1 $100, E2 $100, B1 $300) committed to PostgreSQL"""
    flight = build_flight()
    async with uow_factory() as uow:
        await uow.flight_command_repo.create(flight=flight)
        await uow.commit()
    return flight

