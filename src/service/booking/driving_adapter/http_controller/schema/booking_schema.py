from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.seat_class import SeatClass
from src.service.booking.domain.value_object.seat import Seat


class BookingCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'flight_id': '01234567-89ab-7def-0123-456789abcdef',
                'seat_numbers': ['E1', 'B1'],
            }
        }
    )

    flight_id: UUID
    seat_numbers: List[str] = Field(min_length=1)


class SeatResponse(BaseModel):
    """Seat as stored on the flight, or as snapshotted on a booking"""

    number: str
    seat_class: SeatClass
    price: Decimal
    is_available: bool

    @classmethod
    def from_entity(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            number=seat.number,
            seat_class=seat.seat_class,
            price=seat.price,
            is_available=seat.is_available,
        )


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01234567-89ab-7def-0123-456789abcdef',
                'user_id': 1,
                'flight_id': '01234567-89ab-7def-0123-456789abcdee',
                'seats': [
                    {'number': 'E1', 'seat_class': 'economy', 'price': '100.00', 'is_available': True},
                    {'number': 'B1', 'seat_class': 'business', 'price': '300.00', 'is_available': True},
                ],
                'total_price': '400.00',
                'status': 'confirmed',
                'created_at': '2025-01-10T10:30:00Z',
                'updated_at': '2025-01-10T10:30:00Z',
            }
        }
    )

    id: UUID
    user_id: int
    flight_id: UUID
    seats: List[SeatResponse]
    total_price: Decimal
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            flight_id=booking.flight_id,
            seats=[SeatResponse.from_entity(seat) for seat in booking.seats],
            total_price=booking.total_price,
            status=booking.status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingListResponse(BaseModel):
    items: List[BookingResponse]
    total: int
    page: int
    limit: int


class CancelBookingResponse(BaseModel):
    id: UUID
    status: BookingStatus
    released_seats: List[str]
