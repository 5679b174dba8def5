from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.create_flight_use_case import CreateFlightUseCase
from src.service.booking.app.command.update_flight_use_case import UpdateFlightUseCase
from src.service.booking.app.dto.flight_filter import FlightFilter, FlightOrderBy, SortOrder
from src.service.booking.app.query.get_flight_use_case import GetFlightUseCase
from src.service.booking.app.query.list_flights_use_case import ListFlightsUseCase
from src.service.booking.app.query.lookup_seats_use_case import LookupSeatsUseCase
from src.service.booking.domain.entity.flight_entity import SeatClassConfig
from src.service.booking.domain.value_object.principal import Principal
from src.service.booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.booking.driving_adapter.http_controller.schema.flight_schema import (
    FlightCreateRequest,
    FlightListResponse,
    FlightResponse,
    FlightSummaryResponse,
    FlightUpdateRequest,
    SeatLookupRequest,
    SeatLookupResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_flight(
    request: FlightCreateRequest,
    current_user: Principal = Depends(require_admin),
    use_case: CreateFlightUseCase = Depends(CreateFlightUseCase.depends),
) -> FlightResponse:
    flight = await use_case.execute(
        airline=request.airline,
        flight_number=request.flight_number,
        departure=request.departure.to_value_object(),
        arrival=request.arrival.to_value_object(),
        departure_time=request.departure_time,
        arrival_time=request.arrival_time,
        seat_layout={
            seat_class: SeatClassConfig(count=config.count, price=config.price)
            for seat_class, config in request.seat_layout.items()
        },
    )
    return FlightResponse.from_entity(flight)


@router.patch('/{flight_id}')
@Logger.io
async def update_flight(
    flight_id: UUID,
    request: FlightUpdateRequest,
    current_user: Principal = Depends(require_admin),
    use_case: UpdateFlightUseCase = Depends(UpdateFlightUseCase.depends),
) -> FlightResponse:
    flight = await use_case.execute(
        flight_id=flight_id,
        airline=request.airline,
        flight_number=request.flight_number,
        departure=request.departure.to_value_object() if request.departure else None,
        arrival=request.arrival.to_value_object() if request.arrival else None,
        departure_time=request.departure_time,
        arrival_time=request.arrival_time,
        seat_prices=request.seat_prices,
    )
    return FlightResponse.from_entity(flight)


@router.get('')
@Logger.io
async def list_flights(
    airline: Optional[str] = None,
    departure_city: Optional[str] = None,
    arrival_city: Optional[str] = None,
    departure_date: Optional[date] = None,
    order_by: FlightOrderBy = FlightOrderBy.DEPARTURE_TIME,
    order: SortOrder = SortOrder.ASC,
    page: int = 1,
    limit: Optional[int] = None,
    use_case: ListFlightsUseCase = Depends(ListFlightsUseCase.depends),
) -> FlightListResponse:
    result = await use_case.execute(
        flight_filter=FlightFilter(
            airline=airline,
            departure_city=departure_city,
            arrival_city=arrival_city,
            departure_date=departure_date,
            order_by=order_by,
            order=order,
        ),
        page=page,
        limit=limit,
    )
    return FlightListResponse(
        items=[FlightSummaryResponse.from_entity(flight) for flight in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get('/{flight_id}')
@Logger.io
async def get_flight(
    flight_id: UUID,
    current_user: Principal = Depends(get_current_user),
    use_case: GetFlightUseCase = Depends(GetFlightUseCase.depends),
) -> FlightResponse:
    flight = await use_case.execute(flight_id=flight_id)
    return FlightResponse.from_entity(flight)


@router.post('/{flight_id}/seats/lookup')
@Logger.io
async def lookup_seats(
    flight_id: UUID,
    request: SeatLookupRequest,
    current_user: Principal = Depends(get_current_user),
    use_case: LookupSeatsUseCase = Depends(LookupSeatsUseCase.depends),
) -> SeatLookupResponse:
    """Price and availability check only, nothing is held"""
    selection = await use_case.execute(flight_id=flight_id, seat_numbers=request.seat_numbers)
    return SeatLookupResponse.from_selection(flight_id=flight_id, selection=selection)
