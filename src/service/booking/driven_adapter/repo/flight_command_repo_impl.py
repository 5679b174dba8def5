from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_flight_command_repo import IFlightCommandRepo
from src.service.booking.domain.entity.flight_entity import Flight
from src.service.booking.driven_adapter.model.flight_model import FlightModel, SeatModel
from src.service.booking.driven_adapter.repo.model_mapper import flight_to_entity, flight_to_model


def build_reserve_seat_statement(*, flight_id: UUID, seat_number: str):
    """
    UPDATE seat SET is_available = false
    WHERE flight_id = :flight_id AND number = :number AND is_available IS true

    Under READ COMMITTED a second writer on the same row blocks until the first
    transaction ends, then re-checks the predicate: first committer wins.
    """
    return (
        update(SeatModel)
        .where(
            SeatModel.flight_id == flight_id,
            SeatModel.number == seat_number,
            SeatModel.is_available.is_(True),
        )
        .values(is_available=False, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )


def build_release_seats_statement(*, flight_id: UUID, seat_numbers: Sequence[str]):
    return (
        update(SeatModel)
        .where(SeatModel.flight_id == flight_id, SeatModel.number.in_(list(seat_numbers)))
        .values(is_available=True, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )


def build_refresh_min_price_statement(*, flight_id: UUID):
    """
    UPDATE flight SET min_price = (SELECT min(seat.price) FROM seat WHERE seat.flight_id = :id)
    WHERE flight.id = :id RETURNING flight.min_price
    """
    lowest_price = (
        select(func.min(SeatModel.price))
        .where(SeatModel.flight_id == flight_id)
        .scalar_subquery()
    )
    return (
        update(FlightModel)
        .where(FlightModel.id == flight_id)
        .values(min_price=lowest_price)
        .returning(FlightModel.min_price)
        .execution_options(synchronize_session=False)
    )


class FlightCommandRepoImpl(IFlightCommandRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, flight: Flight) -> Flight:
        self.session.add(flight_to_model(flight))
        await self.session.flush()
        return flight

    @Logger.io
    async def get_by_id_for_update(self, *, flight_id: UUID) -> Optional[Flight]:
        # FOR NO KEY UPDATE: booking inserts only need KEY SHARE on the flight row
        result = await self.session.execute(
            select(FlightModel)
            .where(FlightModel.id == flight_id)
            .with_for_update(key_share=True)
        )
        db_flight = result.scalar_one_or_none()
        return flight_to_entity(db_flight) if db_flight else None

    @Logger.io
    async def update(self, *, flight: Flight) -> Flight:
        await self.session.execute(
            update(FlightModel)
            .where(FlightModel.id == flight.id)
            .values(
                airline=flight.airline,
                flight_number=flight.flight_number,
                departure_airport_code=flight.departure.code,
                departure_airport_name=flight.departure.name,
                departure_city=flight.departure.city,
                departure_country=flight.departure.country,
                arrival_airport_code=flight.arrival.code,
                arrival_airport_name=flight.arrival.name,
                arrival_city=flight.arrival.city,
                arrival_country=flight.arrival.country,
                departure_time=flight.departure_time,
                arrival_time=flight.arrival_time,
                duration_minutes=flight.duration_minutes,
                updated_at=flight.updated_at or datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return flight

    @Logger.io
    async def refresh_min_price(self, *, flight_id: UUID) -> Decimal:
        result = await self.session.execute(
            build_refresh_min_price_statement(flight_id=flight_id)
        )
        return result.scalar_one()

    @Logger.io
    async def update_seat_price(self, *, flight_id: UUID, seat_number: str, price: Decimal) -> bool:
        result = await self.session.execute(
            update(SeatModel)
            .where(SeatModel.flight_id == flight_id, SeatModel.number == seat_number)
            .values(price=price, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def reserve_seat_if_available(self, *, flight_id: UUID, seat_number: str) -> bool:
        result = await self.session.execute(
            build_reserve_seat_statement(flight_id=flight_id, seat_number=seat_number)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release_seats(self, *, flight_id: UUID, seat_numbers: Sequence[str]) -> int:
        if not seat_numbers:
            return 0
        result = await self.session.execute(
            build_release_seats_statement(flight_id=flight_id, seat_numbers=seat_numbers)
        )
        return result.rowcount  # type: ignore[attr-defined]
