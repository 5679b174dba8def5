"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.booking.app.command import (
    create_booking_use_case,
    create_flight_use_case,
    update_booking_status_to_cancelled_use_case,
    update_flight_use_case,
)
from src.service.booking.app.query import (
    get_booking_use_case,
    get_flight_use_case,
    list_bookings_use_case,
    list_flights_use_case,
    lookup_seats_use_case,
)
from src.service.booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    update_booking_status_to_cancelled_use_case,
    create_flight_use_case,
    update_flight_use_case,
    lookup_seats_use_case,
    get_flight_use_case,
    list_flights_use_case,
    list_bookings_use_case,
    get_booking_use_case,
    role_auth,
]
