"""
Unit of Work Pattern - one database transaction per booking engine command

Architecture:
- UoW owns the session lifecycle (open on enter, close on exit)
- UoW owns commit/rollback; leaving the block without commit rolls back
- Repositories receive the shared session from the UoW
- Use cases coordinate several repositories inside one UoW
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import TYPE_CHECKING, Callable, Optional

import anyio
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import InternalError, TransientError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.booking.app.interface.i_flight_command_repo import IFlightCommandRepo
    from src.service.booking.app.interface.i_flight_query_repo import IFlightQueryRepo


# deadlock_detected, serialization_failure
RETRYABLE_SQLSTATES = frozenset({'40P01', '40001'})


def sqlstate_of(exc: DBAPIError) -> Optional[str]:
    return getattr(exc.orig, 'sqlstate', None) or getattr(exc.orig, 'pgcode', None)


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow_factory() as uow:
            flight = await uow.flight_query_repo.get_by_id(flight_id=...)
            reserved = await uow.flight_command_repo.reserve_seat_if_available(...)
            await uow.booking_command_repo.create(booking=...)
            await uow.commit()
    """

    flight_command_repo: IFlightCommandRepo
    flight_query_repo: IFlightQueryRepo
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        # Shielded: a timed-out scope must still be able to abort the transaction
        with anyio.CancelScope(shield=True):
            await self.rollback()  # No-op after a successful commit
            await self._close()

    async def commit(self) -> None:
        await self._commit()

    async def _close(self) -> None:
        return None

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_maker: Callable[[], AsyncSession]) -> None:
        self.session_maker = session_maker
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.flight_command_repo_impl import (
            FlightCommandRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.flight_query_repo_impl import (
            FlightQueryRepoImpl,
        )

        self.session = self.session_maker()

        # All repos share the session so every statement runs in one transaction
        self.flight_command_repo = FlightCommandRepoImpl(session=self.session)
        self.flight_query_repo = FlightQueryRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await super().__aexit__(exc_type, exc, tb)

        # Surface driver failures as engine errors once the transaction is aborted
        if isinstance(exc, DBAPIError) and exc.connection_invalidated:
            Logger.base.warning(f'⚠️ [UOW] Connection lost, transaction aborted: {exc}')
            raise TransientError('Database connection lost, transaction aborted') from exc
        if isinstance(exc, DBAPIError) and sqlstate_of(exc) in RETRYABLE_SQLSTATES:
            Logger.base.warning(f'⚔️ [UOW] Aborted by a concurrent transaction: {exc}')
            raise TransientError('Transaction aborted by a concurrent update, retry') from exc
        if isinstance(exc, SQLAlchemyError):
            Logger.base.error(f'❌ [UOW] Persistence failure, transaction aborted: {exc}')
            raise InternalError('Unexpected persistence failure') from exc

    async def _commit(self) -> None:
        # pyrefly: ignore  # missing-attribute
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()

    async def _close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None
