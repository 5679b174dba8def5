"""Application layer DTOs"""

from src.service.booking.app.dto.booking_filter import BookingFilter
from src.service.booking.app.dto.flight_filter import FlightFilter, FlightOrderBy, SortOrder
from src.service.booking.app.dto.pagination import Page, Pagination

__all__ = [
    'BookingFilter',
    'FlightFilter',
    'FlightOrderBy',
    'Page',
    'Pagination',
    'SortOrder',
]
