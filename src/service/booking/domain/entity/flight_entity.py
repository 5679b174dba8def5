from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Tuple
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_errors import SeatNotFoundError
from src.service.booking.domain.enum.seat_class import SEAT_LAYOUT_ORDER, SeatClass
from src.service.booking.domain.value_object.airport import Airport
from src.service.booking.domain.value_object.seat import Seat, to_price


@attrs.define(frozen=True)
class SeatClassConfig:
    """How many seats of one class to generate and at what price"""

    count: int
    price: Decimal = attrs.field(converter=to_price)


def compute_min_price(seats: List[Seat]) -> Decimal:
    if not seats:
        raise ValidationFailedError('A flight must have at least one seat')
    return min(seat.price for seat in seats)


def _flight_identity(airline: str, flight_number: str) -> Tuple[str, str]:
    if not airline.strip() or not flight_number.strip():
        raise ValidationFailedError('Airline and flight number are required')
    return airline.strip(), flight_number.strip()


def _duration_minutes(
departure_time: datetime, arrival_time: datetime) -> int:
    if arrival_time <= departure_time:
        raise ValidationFailedError('Arrival time must be after departure time')
    return int((arrival_time - departure_time).total_seconds() // 60)


@attrs.define
class Flight:
    id: UUID
    airline: str
    flight_number: str
    departure: Airport
    arrival: Airport
    departure_time: datetime
    arrival_time: datetime
    duration_minutes: int
    min_price: Decimal
    seats: List[Seat] = attrs.field(factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        airline: str,
        flight_number: str,
        departure: Airport,
        arrival: Airport,
        departure_time: datetime,
        arrival_time: datetime,
        seat_layout: Mapping[SeatClass, SeatClassConfig],
    ) -> 'Flight':
        """
        Create a flight and synthesize its seats from a class -> {count, price} layout.

        Seats are numbered sequentially per class (B1..Bn, F1..Fk, E1..Em).
        """
        airline, flight_number = _flight_identity(airline, flight_number)
        if not seat_layout:
            raise ValidationFailedError('Seat layout must contain at least one seat class')

        seats: List[Seat] = []
        for seat_class in SEAT_LAYOUT_ORDER:
            config = seat_layout.get(seat_class)
            if config is None:
                continue
            if config.count < 1:
                raise ValidationFailedError(f'Seat count for {seat_class} must be at least 1')
            if config.price <= 0:
                raise ValidationFailedError(f'Seat price for {seat_class} must be positive')
            seats.extend(
                Seat(number=f'{seat_class.prefix}{i}', seat_class=seat_class, price=config.price)
                for i in range(1, config.count + 1)
            )

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            airline=airline,
            flight_number=flight_number,
            departure=departure,
            arrival=arrival,
            departure_time=departure_time,
            arrival_time=arrival_time,
            duration_minutes=_duration_minutes(departure_time, arrival_time),
            min_price=compute_min_price(seats),
            seats=seats,
            created_at=now,
            updated_at=now,
        )

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def available_seats(self) -> int:
        return sum(1 for seat in self.seats if seat.is_available)

    @Logger.io
    def reschedule(
        self,
        *,
        airline: Optional[str] = None,
        flight_number: Optional[str] = None,
        departure: Optional[Airport] = None,
        arrival: Optional[Airport] = None,
        departure_time: Optional[datetime] = None,
        arrival_time: Optional[datetime] = None,
    ) -> 'Flight':
        """Apply administrative edits to the flight's schedule attributes"""
        new_airline, new_flight_number = _flight_identity(
            airline if airline is not None else self.airline,
            flight_number if flight_number is not None else self.flight_number,
        )
        new_departure_time = departure_time or self.departure_time
        new_arrival_time = arrival_time or self.arrival_time
        return attrs.evolve(
            self,
            airline=new_airline,
            flight_number=new_flight_number,
            departure=departure or self.departure,
            arrival=arrival or self.arrival,
            departure_time=new_departure_time,
            arrival_time=new_arrival_time,
            duration_minutes=_duration_minutes(new_departure_time, new_arrival_time),
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def reprice_seats(self, *, seat_prices: Mapping[str, Decimal]) -> 'Flight':
        """
        Change seat prices by seat number and recompute min_price.

        Availability is carried over untouched.
        """
        known: Dict[str, Seat] = {seat.number: seat for seat in self.seats}
        for seat_number, price in seat_prices.items():
            if seat_number not in known:
                raise SeatNotFoundError(seat_number)
            if to_price(price) <= 0:
                raise ValidationFailedError(f'Seat price for {seat_number} must be positive')

        seats = [
            attrs.evolve(seat, price=seat_prices[seat.number])
            if seat.number in seat_prices
            else seat
            for seat in self.seats
        ]
        return attrs.evolve(
            self,
            seats=seats,
            min_price=compute_min_price(seats),
            updated_at=datetime.now(timezone.utc),
        )
