"""Booking Domain Value Objects"""

from src.service.booking.domain.value_object.airport import Airport
from src.service.booking.domain.value_object.principal import Principal
from src.service.booking.domain.value_object.seat import Seat
from src.service.booking.domain.value_object.seat_selection import SeatSelection

__all__ = ['Airport', 'Principal', 'Seat', 'SeatSelection']
