from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.booking.domain.booking_errors import FlightNotFoundError
from src.service.booking.domain.entity.flight_entity import Flight


class GetFlightUseCase:
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
    async def execute(self, *, flight_id: UUID) -> Flight:
        flight = await self.flight_query_repo.get_by_id(flight_id=flight_id)
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return flight
