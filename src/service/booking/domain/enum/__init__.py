"""Booking Domain Enums"""

from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.seat_class import SeatClass
from src.service.booking.domain.enum.user_role import UserRole

__all__ = ['BookingStatus', 'SeatClass', 'UserRole']
