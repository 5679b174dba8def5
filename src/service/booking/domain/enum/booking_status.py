from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'pending'  # Reserved for payment integration, never produced today
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
