from datetime import datetime
from typing import Callable, Mapping, Optional, Self

from dependency_injector.wiring import Provider, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_timeout import transaction_timeout
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.flight_entity import Flight, SeatClassConfig
from src.service.booking.domain.enum.seat_class import SeatClass
from src.service.booking.domain.value_object.airport import Airport


class CreateFlightUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(Provider[Container.unit_of_work]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def execute(
        self,
        *,
        airline: str,
        flight_number: str,
        departure: Airport,
        arrival: Airport,
        departure_time: datetime,
        arrival_time: datetime,
        seat_layout: Mapping[SeatClass, SeatClassConfig],
        timeout: Optional[float] = None,
    ) -> Flight:
        flight = Flight.create(
            airline=airline,
            flight_number=flight_number,
            departure=departure,
            arrival=arrival,
            departure_time=departure_time,
            arrival_time=arrival_time,
            seat_layout=seat_layout,
        )

        with transaction_timeout(timeout, operation='create_flight'):
            async with self.uow_factory() as uow:
                await uow.flight_command_repo.create(flight=flight)
                await uow.commit()

        Logger.base.info(
            f'✈️ [FLIGHT] Created {flight.airline} {flight.flight_number} ({flight.id}) '
            f'with {flight.total_seats} seats, min price {flight.min_price}'
        )
        return flight
