from contextlib import asynccontextmanager
from datetime import datetime, time, timedelta, timezone
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.flight_filter import FlightFilter, FlightOrderBy, SortOrder
from src.service.booking.app.dto.pagination import Pagination
from src.service.booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.booking.domain.entity.flight_entity import Flight
from src.service.booking.driven_adapter.model.flight_model import FlightModel
from src.service.booking.driven_adapter.repo.model_mapper import flight_to_entity


_ORDER_COLUMNS = {
    FlightOrderBy.DEPARTURE_TIME: FlightModel.departure_time,
    FlightOrderBy.PRICE: FlightModel.min_price,
    FlightOrderBy.DURATION: FlightModel.duration_minutes,
}


def build_flight_conditions(flight_filter: FlightFilter) -> list:
    conditions = []
    if flight_filter.airline:
        conditions.append(FlightModel.airline.icontains(flight_filter.airline, autoescape=True))
    if flight_filter.departure_city:
        conditions.append(
            func.lower(FlightModel.departure_city) == flight_filter.departure_city.lower()
        )
    if flight_filter.arrival_city:
        conditions.append(func.lower(FlightModel.arrival_city) == flight_filter.arrival_city.lower())
    if flight_filter.departure_date:
        day_start = datetime.combine(flight_filter.departure_date, time.min, tzinfo=timezone.utc)
        conditions.append(FlightModel.departure_time >= day_start)
        conditions.append(FlightModel.departure_time < day_start + timedelta(days=1))
    return conditions


class FlightQueryRepoImpl(IFlightQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        session: AsyncSession | None = None,
    ):
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Session injected by the UoW is used as-is (its transaction is the caller's),
        otherwise a short-lived one comes from session_factory.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_by_id(self, *, flight_id: UUID) -> Optional[Flight]:
        async with self._get_session() as session:
            result = await session.execute(select(FlightModel).where(FlightModel.id == flight_id))
            db_flight = result.scalar_one_or_none()
            return flight_to_entity(db_flight) if db_flight else None

    @Logger.io
    async def list_flights(
        self, *, flight_filter: FlightFilter, pagination: Pagination
    ) -> Tuple[List[Flight], int]:
        conditions = build_flight_conditions(flight_filter)
        order_column = _ORDER_COLUMNS[flight_filter.order_by]
        ordering = order_column.desc() if flight_filter.order == SortOrder.DESC else order_column.asc()

        async with self._get_session() as session:
            count_stmt = select(func.count()).select_from(FlightModel)
            page_stmt = select(FlightModel)
            if conditions:
                count_stmt = count_stmt.where(*conditions)
                page_stmt = page_stmt.where(*conditions)

            total = await session.scalar(count_stmt)
            result = await session.execute(
                page_stmt
                .order_by(ordering, FlightModel.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            )
            flights = [flight_to_entity(db_flight) for db_flight in result.scalars().all()]
            return flights, total or 0
