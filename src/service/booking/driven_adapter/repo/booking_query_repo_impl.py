from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_filter import BookingFilter
from src.service.booking.app.dto.pagination import Pagination
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.model_mapper import booking_to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        session: AsyncSession | None = None,
    ):
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            db_booking = result.scalar_one_or_none()
            return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def list_bookings(
        self,
        *,
        user_id: Optional[int],
        booking_filter: BookingFilter,
        pagination: Pagination,
    ) -> Tuple[List[Booking], int]:
        conditions = []
        if user_id is not None:
            conditions.append(BookingModel.user_id == user_id)
        if booking_filter.status is not None:
            conditions.append(BookingModel.status == booking_filter.status.value)
        if booking_filter.flight_id is not None:
            conditions.append(BookingModel.flight_id == booking_filter.flight_id)

        async with self._get_session() as session:
            count_stmt = select(func.count()).select_from(BookingModel)
            page_stmt = select(BookingModel)
            if conditions:
                count_stmt = count_stmt.where(*conditions)
                page_stmt = page_stmt.where(*conditions)

            total = await session.scalar(count_stmt)
            result = await session.execute(
                page_stmt
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
                .offset(pagination.offset)
                .limit(pagination.limit)
            )
            bookings = [booking_to_entity(db_booking) for db_booking in result.scalars().all()]
            return bookings, total or 0
