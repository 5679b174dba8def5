"""Conversions between SQLAlchemy models and domain entities"""

from typing import Any, Dict, List

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.flight_entity import Flight
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.value_object.airport import Airport
from src.service.booking.domain.value_object.seat import Seat
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.flight_model import FlightModel, SeatModel


def seat_to_entity(db_seat: SeatModel) -> Seat:
    return Seat(
        number=db_seat.number,
        seat_class=db_seat.seat_class,
        price=db_seat.price,
        is_available=db_seat.is_available,
    )


def flight_to_entity(db_flight: FlightModel) -> Flight:
    return Flight(
        id=db_flight.id,
        airline=db_flight.airline,
        flight_number=db_flight.flight_number,
        departure=Airport(
            code=db_flight.departure_airport_code,
            name=db_flight.departure_airport_name,
            city=db_flight.departure_city,
            country=db_flight.departure_country,
        ),
        arrival=Airport(
            code=db_flight.arrival_airport_code,
            name=db_flight.arrival_airport_name,
            city=db_flight.arrival_city,
            country=db_flight.arrival_country,
        ),
        departure_time=db_flight.departure_time,
        arrival_time=db_flight.arrival_time,
        duration_minutes=db_flight.duration_minutes,
        min_price=db_flight.min_price,
        seats=[seat_to_entity(db_seat) for db_seat in db_flight.seats],
        created_at=db_flight.created_at,
        updated_at=db_flight.updated_at,
    )


def flight_to_model(flight: Flight) -> FlightModel:
    return FlightModel(
        id=flight.id,
        airline=flight.airline,
        flight_number=flight.flight_number,
        departure_airport_code=flight.departure.code,
        departure_airport_name=flight.departure.name,
        departure_city=flight.departure.city,
        departure_country=flight.departure.country,
        arrival_airport_code=flight.arrival.code,
        arrival_airport_name=flight.arrival.name,
        arrival_city=flight.arrival.city,
        arrival_country=flight.arrival.country,
        departure_time=flight.departure_time,
        arrival_time=flight.arrival_time,
        duration_minutes=flight.duration_minutes,
        min_price=flight.min_price,
        created_at=flight.created_at,
        updated_at=flight.updated_at,
        seats=[
            SeatModel(
                number=seat.number,
                seat_class=seat.seat_class.value,
                price=seat.price,
                is_available=seat.is_available,
                position=position,
            )
            for position, seat in enumerate(flight.seats)
        ],
    )


def seats_to_snapshot(seats: List[Seat]) -> List[Dict[str, Any]]:
    return [
        {
            'number': seat.number,
            'seat_class': seat.seat_class.value,
            'price': str(seat.price),
            'is_available': seat.is_available,
        }
        for seat in seats
    ]


def booking_to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        user_id=db_booking.user_id,
        flight_id=db_booking.flight_id,
        seats=[Seat(**seat) for seat in db_booking.seats],
        total_price=db_booking.total_price,
        status=BookingStatus(db_booking.status),
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


def booking_to_model(booking: Booking) -> BookingModel:
    return BookingModel(
        id=booking.id,
        user_id=booking.user_id,
        flight_id=booking.flight_id,
        seats=seats_to_snapshot(booking.seats),
        total_price=booking.total_price,
        status=booking.status.value,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )
