from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.flight_filter import FlightFilter
from src.service.booking.app.dto.pagination import Page, Pagination
from src.service.booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.booking.domain.entity.flight_entity import Flight


class ListFlightsUseCase:
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
    async def execute(
        self,
        *,
        flight_filter: Optional[FlightFilter] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[Flight]:
        pagination = Pagination.of(page=page, limit=limit)
        flights, total = await self.flight_query_repo.list_flights(
            flight_filter=flight_filter or FlightFilter(), pagination=pagination
        )
        return Page(items=flights, total=total, page=pagination.page, limit=pagination.limit)
