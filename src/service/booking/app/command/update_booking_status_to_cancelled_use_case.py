from typing import Callable, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provider, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_timeout import transaction_timeout
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, InternalError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.domain.booking_errors import BookingNotFoundError, InvalidStateError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.value_object.principal import Principal


tracer = trace.get_tracer(__name__)


class UpdateBookingToCancelledUseCase:
    """
    Cancel a confirmed booking and give its seats back.

    Status flip and seat release commit together: a failure while releasing
    also undoes the status change, so seats are never left held by a
    cancelled booking. Cancelling twice is rejected (InvalidState).
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
        booking_id: UUID,
        principal: Principal,
        timeout: Optional[float] = None,
    ) -> Booking:
        with tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': principal.user_id},
        ) as span:
            try:
                cancelled = await self._cancel(
                    booking_id=booking_id, principal=principal, timeout=timeout
                )
            except Exception as e:
                code = getattr(e, 'code', InternalError.code)
                span.set_attribute('error.code', code)
                metrics.record_cancellation(result=code)
                raise

            metrics.record_cancellation(
                result=cancelled.status.value, seat_count=len(cancelled.seats)
            )

        Logger.base.info(
            f'✅ [CANCEL] {booking_id} cancelled, released seats {cancelled.seat_numbers} '
            f'on flight {cancelled.flight_id}'
        )
        return cancelled

    async def _cancel(
        self, *, booking_id: UUID, principal: Principal, timeout: Optional[float]
    ) -> Booking:
        with transaction_timeout(timeout, operation='cancel_booking'):
            async with self.uow_factory() as uow:
                booking = await uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if booking is None:
                    raise BookingNotFoundError(booking_id)

                if not principal.can_access(owner_id=booking.user_id):
                    raise ForbiddenError('Only the booking owner can cancel this booking')

                # Raises InvalidStateError unless confirmed
                cancelled = booking.cancel()

                flipped = await uow.booking_command_repo.update_status_if_current(
                    booking_id=booking_id,
                    expected_status=BookingStatus.CONFIRMED,
                    new_status=BookingStatus.CANCELLED,
                    updated_at=cancelled.updated_at,  # type: ignore[arg-type]
                )
                if not flipped:
                    raise InvalidStateError(f'Booking {booking_id} was cancelled concurrently')

                released = await uow.flight_command_repo.release_seats(
                    flight_id=booking.flight_id, seat_numbers=booking.seat_numbers
                )
                if released != len(booking.seats):
                    raise InternalError(
                        f'Booking {booking_id} references seats missing from flight '
                        f'{booking.flight_id}: released {released} of {len(booking.seats)}'
                    )

                await uow.commit()
                return cancelled
