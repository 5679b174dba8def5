from typing import Self, Sequence
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.booking.domain.booking_errors import FlightNotFoundError
from src.service.booking.domain.seat_inventory_domain import lookup_seats, validate_seat_numbers
from src.service.booking.domain.value_object.seat_selection import SeatSelection


class LookupSeatsUseCase:
    """
    Advisory, read-only check of a seat selection and its price.

    A successful lookup does not hold the seats; only a booking does.
    """

    def __init__(self, *, flight_query_repo: IFlightQueryRepo) -> None:
        self.flight_query_repo = flight_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        flight_query_repo: IFlightQueryRepo = Depends(Provide[Container.flight_query_repo]),
    ) -> Self:
        return cls(flight_query_repo=flight_query_repo)

    @Logger.io
    async def execute(self, *, flight_id: UUID, seat_numbers: Sequence[str]) -> SeatSelection:
        requested = validate_seat_numbers(seat_numbers)
        flight = await self.flight_query_repo.get_by_id(flight_id=flight_id)
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return lookup_seats(flight.seats, requested)
