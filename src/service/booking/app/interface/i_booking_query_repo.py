from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.service.booking.app.dto.booking_filter import BookingFilter
from src.service.booking.app.dto.pagination import Pagination
from src.service.booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_bookings(
        self,
        *,
        user_id: Optional[int],
        booking_filter: BookingFilter,
        pagination: Pagination,
    ) -> Tuple[List[Booking], int]:
        """Newest first. `user_id=None` lists every user's bookings."""
        pass
