"""
Seat Inventory Domain
Pure seat lookup / validation rules, no infrastructure access.

The lookup is advisory: availability can change between the read and the
conditional update performed by the reservation, which is what actually
guarantees a seat is never sold twice.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from src.platform.exception.exceptions import ValidationFailedError
from src.service.booking.domain.booking_errors import SeatNotFoundError, SeatUnavailableError
from src.service.booking.domain.value_object.seat import Seat
from src.service.booking.domain.value_object.seat_selection import SeatSelection


def validate_seat_numbers(seat_numbers: Sequence[str]) -> List[str]:
    """
    Reject malformed seat requests before anything touches the store.

    Returns the seat numbers stripped of surrounding whitespace, order preserved.
    """
    if not seat_numbers:
        raise ValidationFailedError('At least one seat number is required')

    normalized: List[str] = []
    for seat_number in seat_numbers:
        if not isinstance(seat_number, str) or not seat_number.strip():
            raise ValidationFailedError('Seat numbers must be non-empty strings')
        normalized.append(seat_number.strip())

    seen: set[str] = set()
    for seat_number in normalized:
        if seat_number in seen:
            raise ValidationFailedError(f'Duplicate seat number in request: {seat_number}')
        seen.add(seat_number)

    return normalized


def lookup_seats(seats: Iterable[Seat], seat_numbers: Sequence[str]) -> SeatSelection:
    """
    Resolve requested seat numbers against a flight's seat list.

    The seat list is walked once. Errors are reported for the first offending
    seat in request order.

    Raises:
        SeatNotFoundError: a requested number is not on the flight
        SeatUnavailableError: a requested seat is already taken
    """
    requested = set(seat_numbers)
    matched: Dict[str, Seat] = {}
    for seat in seats:
        if seat.number in requested:
            matched[seat.number] = seat

    selected: List[Seat] = []
    for seat_number in seat_numbers:
        seat = matched.get(seat_number)
        if seat is None:
            raise SeatNotFoundError(seat_number)
        if not seat.is_available:
            raise SeatUnavailableError(seat_number)
        selected.append(seat)

    return SeatSelection(seats=selected, total_price=sum_prices(selected))


def sum_prices(seats: Iterable[Seat]) -> Decimal:
    return sum((seat.price for seat in seats), Decimal('0.00'))
