"""Application layer interfaces (Ports)"""

from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.app.interface.i_flight_command_repo import IFlightCommandRepo
from src.service.booking.app.interface.i_flight_query_repo import IFlightQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'IFlightCommandRepo',
    'IFlightQueryRepo',
]
