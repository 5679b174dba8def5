from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus


class IBookingCommandRepo(ABC):
    """Repository interface for booking write operations"""

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def update_status_if_current(
        self,
        *,
        booking_id: UUID,
        expected_status: BookingStatus,
        new_status: BookingStatus,
        updated_at: datetime,
    ) -> bool:
        """Conditional status transition; False if the booking was no longer in expected_status"""
        pass
