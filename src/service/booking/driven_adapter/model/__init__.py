"""SQLAlchemy models, imported here so Base.metadata sees every table"""

from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.flight_model import FlightModel, SeatModel

__all__ = ['BookingModel', 'FlightModel', 'SeatModel']
