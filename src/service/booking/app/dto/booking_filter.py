from typing import Optional
from uuid import UUID

import attrs

from src.service.booking.domain.enum.booking_status import BookingStatus


@attrs.define(frozen=True)
class BookingFilter:
    status: Optional[BookingStatus] = None
    flight_id: Optional[UUID] = None
