from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.command.update_booking_status_to_cancelled_use_case import (
    UpdateBookingToCancelledUseCase,
)
from src.service.booking.app.dto.booking_filter import BookingFilter
from src.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.value_object.principal import Principal
from src.service.booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    CancelBookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: Principal = Depends(get_current_user),
    booking_use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('flight_id', str(request.flight_id))
        span.set_attribute('user_id', current_user.user_id)

        booking = await booking_use_case.execute(
            flight_id=request.flight_id,
            user_id=current_user.user_id,
            seat_numbers=request.seat_numbers,
        )

        span.set_attribute('booking.id', str(booking.id))
        return BookingResponse.from_entity(booking)


@router.get('/my_booking')
@Logger.io
async def list_my_bookings(
    booking_status: Optional[BookingStatus] = None,
    flight_id: Optional[UUID] = None,
    page: int = 1,
    limit: Optional[int] = None,
    current_user: Principal = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    result = await use_case.execute(
        user_id=current_user.user_id,
        booking_filter=BookingFilter(status=booking_status, flight_id=flight_id),
        page=page,
        limit=limit,
    )
    return BookingListResponse(
        items=[BookingResponse.from_entity(booking) for booking in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get('')
@Logger.io
async def list_all_bookings(
    user_id: Optional[int] = None,
    booking_status: Optional[BookingStatus] = None,
    flight_id: Optional[UUID] = None,
    page: int = 1,
    limit: Optional[int] = None,
    current_user: Principal = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    """Admin listing across all users, optionally narrowed to one user"""
    result = await use_case.execute(
        user_id=user_id,
        booking_filter=BookingFilter(status=booking_status, flight_id=flight_id),
        page=page,
        limit=limit,
    )
    return BookingListResponse(
        items=[BookingResponse.from_entity(booking) for booking in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UUID,
    current_user: Principal = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id, principal=current_user)
    return BookingResponse.from_entity(booking)


@router.patch('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    current_user: Principal = Depends(get_current_user),
    use_case: UpdateBookingToCancelledUseCase = Depends(UpdateBookingToCancelledUseCase.depends),
) -> CancelBookingResponse:
    # Use case raises for missing / foreign / already cancelled bookings (Fail Fast)
    booking = await use_case.execute(booking_id=booking_id, principal=current_user)
    return CancelBookingResponse(
        id=booking.id,
        status=booking.status,
        released_seats=booking.seat_numbers,
    )
