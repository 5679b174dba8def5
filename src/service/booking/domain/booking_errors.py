"""
Booking engine error taxonomy

Each error carries a stable machine-readable `code`; the HTTP layer maps the
platform base class to a status code.
"""

from uuid import UUID

from src.platform.exception.exceptions import ConflictError, NotFoundError


class FlightNotFoundError(NotFoundError):
    code = 'FLIGHT_NOT_FOUND'

    def __init__(self, flight_id: UUID) -> None:
        self.flight_id = flight_id
        super().__init__(f'Flight not found: {flight_id}')


class BookingNotFoundError(NotFoundError):
    code = 'BOOKING_NOT_FOUND'

    def __init__(self, booking_id: UUID) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking not found: {booking_id}')


class SeatNotFoundError(NotFoundError):
    code = 'SEAT_NOT_FOUND'

    def __init__(self, seat_number: str) -> None:
        self.seat_number = seat_number
        super().__init__(f'Seat not found: {seat_number}')


class SeatUnavailableError(ConflictError):
    """Seat was already taken when the flight was read"""

    code = 'SEAT_UNAVAILABLE'

    def __init__(self, seat_number: str) -> None:
        self.seat_number = seat_number
        super().__init__(f'Seat is not available: {seat_number}')


class SeatConflictError(ConflictError):
    """Seat was available when read but another reservation flipped it first"""

    code = 'SEAT_CONFLICT'

    def __init__(self, seat_number: str) -> None:
        self.seat_number = seat_number
        super().__init__(f'Seat was taken by a concurrent booking: {seat_number}')


class InvalidStateError(ConflictError):
    code = 'INVALID_STATE'
