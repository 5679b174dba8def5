from decimal import Decimal
from typing import List

import attrs

from src.service.booking.domain.value_object.seat import Seat


@attrs.define(frozen=True)
class SeatSelection:
    """Seats resolved from a request, in request order, with their summed price"""

    seats: List[Seat]
    total_price: Decimal

    @property
    def seat_numbers(self) -> List[str]:
        return [seat.number for seat in self.seats]
