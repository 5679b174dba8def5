import time
from typing import Callable, Optional, Self, Sequence
from uuid import UUID

from dependency_injector.wiring import Provider, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_timeout import transaction_timeout
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InternalError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.domain.booking_errors import FlightNotFoundError, SeatConflictError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.seat_inventory_domain import lookup_seats, validate_seat_numbers


tracer = trace.get_tracer(__name__)


class CreateBookingUseCase:
    """
    Reserve seats on one flight and record exactly one confirmed booking.

    Flow (single transaction):
    1. Validate the request (non-empty, distinct seat numbers)
    2. Read the flight, resolve seats (fail fast on missing / taken seats)
    3. Conditional update per seat in seat-number order: available -> unavailable,
       zero rows = SeatConflict
    4. Insert the booking with a snapshot of the seats and their summed price
    5. Commit; any failure before this point rolls back every flip of step 3
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
        user_id: int,
        seat_numbers: Sequence[str],
        timeout: Optional[float] = None,
    ) -> Booking:
        started_at = time.perf_counter()
        with tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'flight.id': str(flight_id), 'user.id': user_id},
        ) as span:
            try:
                requested = validate_seat_numbers(seat_numbers)
                span.set_attribute('seat.count', len(requested))
                booking = await self._reserve(
                    flight_id=flight_id, user_id=user_id, seat_numbers=requested, timeout=timeout
                )
            except Exception as e:
                code = getattr(e, 'code', InternalError.code)
                span.set_attribute('error.code', code)
                metrics.record_booking(result=code, duration=time.perf_counter() - started_at)
                raise

            span.set_attribute('booking.id', str(booking.id))
            metrics.record_booking(
                result=booking.status.value,
                duration=time.perf_counter() - started_at,
                seat_count=len(booking.seats),
            )

        Logger.base.info(
            f'✅ [BOOKING] {booking.id} confirmed: flight={flight_id} user={user_id} '
            f'seats={booking.seat_numbers} total={booking.total_price}'
        )
        return booking

    async def _reserve(
        self,
        *,
        flight_id: UUID,
        user_id: int,
        seat_numbers: list[str],
        timeout: Optional[float],
    ) -> Booking:
        with transaction_timeout(timeout, operation='create_booking'):
            async with self.uow_factory() as uow:
                flight = await uow.flight_query_repo.get_by_id(flight_id=flight_id)
                if flight is None:
                    raise FlightNotFoundError(flight_id)

                # Advisory check, the conditional updates below are what decide
                selection = lookup_seats(flight.seats, seat_numbers)

                # Row locks are taken in seat-number order so overlapping requests cannot deadlock
                for seat in sorted(selection.seats, key=lambda seat: seat.number):
                    reserved = await uow.flight_command_repo.reserve_seat_if_available(
                        flight_id=flight_id, seat_number=seat.number
                    )
                    if not reserved:
                        Logger.base.warning(
                            f'⚔️ [BOOKING] Seat {seat.number} on flight {flight_id} '
                            f'lost to a concurrent booking'
                        )
                        raise SeatConflictError(seat.number)

                booking = Booking.create(user_id=user_id, flight_id=flight_id, selection=selection)
                await uow.booking_command_repo.create(booking=booking)
                await uow.commit()
                return booking
