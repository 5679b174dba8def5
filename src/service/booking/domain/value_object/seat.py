from decimal import Decimal

import attrs

from src.service.booking.domain.enum.seat_class import SeatClass


def to_price(value: Decimal | int | float | str) -> Decimal:
    """Normalize any numeric input to a 2-decimal money amount"""
    return Decimal(str(value)).quantize(Decimal('0.01'))


@attrs.define(frozen=True)
class Seat:
    """
    A seat owned by one flight, identified by `number` within it.

    Also used as the booking snapshot: a Booking keeps copies of the Seat values
    as they were at reservation time, immune to later edits of the flight.
    """

    number: str
    seat_class: SeatClass = attrs.field(converter=SeatClass)
    price: Decimal = attrs.field(converter=to_price)
    is_available: bool = True
