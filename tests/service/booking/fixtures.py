"""Shared test data builders for the booking engine"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

from uuid_utils.compat import uuid7

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.flight_entity import Flight
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.seat_class import SeatClass
from src.service.booking.domain.value_object.airport import Airport
from src.service.booking.domain.value_object.seat import Seat


TPE = Airport(
    code='TPE', name='Taiwan Taoyuan International Airport', city='Taipei', country='Taiwan'
)
NRT = Airport(code='NRT', name='Narita International Airport', city='Tokyo', country='Japan')
KIX = Airport(code='KIX', name='Kansai International Airport', city='Osaka', country='Japan')
DEPARTURE_TIME = datetime(2025, 3, 1, 1, 0, tzinfo=timezone.utc)

USER_ID = 1
ANOTHER_USER_ID = 2
ADMIN_ID = 99


def reference_seats() -> List[Seat]:
    """E1 $100, E2 $100, B1 $300"""
    return [
        Seat(number='E1', seat_class=SeatClass.ECONOMY, price=Decimal('100')),
        Seat(number='E2', seat_class=SeatClass.ECONOMY, price=Decimal('100')),
        Seat(number='B1', seat_class=SeatClass.BUSINESS, price=Decimal('300')),
    ]


def build_flight(
    *,
    seats: Optional[List[Seat]] = None,
    airline: str = 'EVA Air',
    flight_number: str = 'BR198',
    departure: Airport = TPE,
    arrival: Airport = NRT,
    departure_time: datetime = DEPARTURE_TIME,
    duration: timedelta = timedelta(hours=3, minutes=15),
) -> Flight:
    seats = reference_seats() if seats is None else seats
    now = datetime.now(timezone.utc)
    return Flight(
        id=uuid7(),
        airline=airline,
        flight_number=flight_number,
        departure=departure,
        arrival=arrival,
        departure_time=departure_time,
        arrival_time=departure_time + duration,
        duration_minutes=int(duration.total_seconds() // 60),
        min_price=min(seat.price for seat in seats),
        seats=seats,
        created_at=now,
        updated_at=now,
    )


def build_booking(
    *,
    flight: Flight,
    seat_numbers: List[str],
    user_id: int = USER_ID,
    status: BookingStatus = BookingStatus.CONFIRMED,
) -> Booking:
    seats = [seat for seat in flight.seats if seat.number in seat_numbers]
    now = datetime.now(timezone.utc)
    return Booking(
        id=uuid7(),
        user_id=user_id,
        flight_id=flight.id,
        seats=seats,
        total_price=sum((seat.price for seat in seats), Decimal('0.00')),
        status=status,
        created_at=now,
        updated_at=now,
    )
