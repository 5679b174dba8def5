from datetime import datetime
from decimal import Decimal
from typing import Callable, Mapping, Optional, Self
from uuid import UUID

import attrs
from dependency_injector.wiring import Provider, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_timeout import transaction_timeout
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InternalError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_errors import FlightNotFoundError
from src.service.booking.domain.entity.flight_entity import Flight
from src.service.booking.domain.value_object.airport import Airport
from src.service.booking.domain.value_object.seat import to_price


class UpdateFlightUseCase:
    """
    Administrative edit of a flight.

    Seat availability is never written here: only schedule attributes and
    per-seat prices. The flight row stays locked for the whole transaction and
    min_price is recomputed from the stored seat prices before commit.
    """

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
        flight_id: UUID,
        airline: Optional[str] = None,
        flight_number: Optional[str] = None,
        departure: Optional[Airport] = None,
        arrival: Optional[Airport] = None,
        departure_time: Optional[datetime] = None,
        arrival_time: Optional[datetime] = None,
        seat_prices: Optional[Mapping[str, Decimal]] = None,
        timeout: Optional[float] = None,
    ) -> Flight:
        with transaction_timeout(timeout, operation='update_flight'):
            async with self.uow_factory() as uow:
                flight = await uow.flight_command_repo.get_by_id_for_update(flight_id=flight_id)
                if flight is None:
                    raise FlightNotFoundError(flight_id)

                updated = flight.reschedule(
                    airline=airline,
                    flight_number=flight_number,
                    departure=departure,
                    arrival=arrival,
                    departure_time=departure_time,
                    arrival_time=arrival_time,
                )
                if seat_prices:
                    updated = updated.reprice_seats(seat_prices=seat_prices)

                await uow.flight_command_repo.update(flight=updated)

                if seat_prices:
                    for seat_number, price in seat_prices.items():
                        changed = await uow.flight_command_repo.update_seat_price(
                            flight_id=flight_id, seat_number=seat_number, price=to_price(price)
                        )
                        if not changed:
                            raise InternalError(
                                f'Seat {seat_number} vanished from flight {flight_id} during update'
                            )
                    min_price = await uow.flight_command_repo.refresh_min_price(
                        flight_id=flight_id
                    )
                    updated = attrs.evolve(updated, min_price=min_price)

                await uow.commit()

        Logger.base.info(f'✏️ [FLIGHT] Updated {flight_id}, min price {updated.min_price}')
        return updated
