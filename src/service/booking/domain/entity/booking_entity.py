from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_errors import InvalidStateError
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.seat_inventory_domain import sum_prices
from src.service.booking.domain.value_object.seat import Seat
from src.service.booking.domain.value_object.seat_selection import SeatSelection


@attrs.define
class Booking:
    id: UUID
    user_id: int
    flight_id: UUID
    seats: List[Seat]
    total_price: Decimal
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, user_id: int, flight_id: UUID, selection: SeatSelection) -> 'Booking':
        """
        Build a confirmed booking from a resolved seat selection.

        The seats are stored as a snapshot; total_price is always the sum of it.
        """
        if not selection.seats:
            raise ValidationFailedError('A booking must contain at least one seat')

        snapshot = list(selection.seats)
        total_price = sum_prices(snapshot)
        if total_price != selection.total_price:
            raise ValidationFailedError('Total price does not match the selected seats')

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            flight_id=flight_id,
            seats=snapshot,
            total_price=total_price,
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    @property
    def seat_numbers(self) -> List[str]:
        return [seat.number for seat in self.seats]

    @Logger.io
    def cancel(self) -> 'Booking':
        """
        confirmed -> cancelled, the only transition a booking allows.

        Raises:
            InvalidStateError: booking is not confirmed (cancelled is terminal)
        """
        if self.status != BookingStatus.CONFIRMED:
            raise InvalidStateError(
                f'Booking {self.id} cannot be cancelled from status {self.status}'
            )

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=BookingStatus.CANCELLED, updated_at=now)
