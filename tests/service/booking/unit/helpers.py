"""
Test helpers for unit tests

Provides a Unit of Work whose repositories are AsyncMocks, for use cases
that are tested call-by-call rather than against the in-memory store.
"""

from typing import Optional
from unittest.mock import AsyncMock

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.flight_entity import Flight


class MockUnitOfWork(AbstractUnitOfWork):
    """
    Example:
        ```python
        uow = MockUnitOfWork(flight=some_flight)
        use_case = CreateBookingUseCase(uow_factory=lambda: uow)
        await use_case.execute(...)
        uow.flight_command_repo.reserve_seat_if_available.assert_awaited()
        ```
    """

    def __init__(
        self,
        *,
        flight: Optional[Flight] = None,
        booking: Optional[Booking] = None,
    ) -> None:
        self.flight_query_repo = AsyncMock()
        self.flight_query_repo.get_by_id = AsyncMock(return_value=flight)

        self.flight_command_repo = AsyncMock()
        self.flight_command_repo.reserve_seat_if_available = AsyncMock(return_value=True)
        self.flight_command_repo.release_seats = AsyncMock(
            return_value=len(booking.seats) if booking else 0
        )
        self.flight_command_repo.update_seat_price = AsyncMock(return_value=True)

        self.booking_command_repo = AsyncMock()
        self.booking_command_repo.get_by_id = AsyncMock(return_value=booking)
        self.booking_command_repo.update_status_if_current = AsyncMock(return_value=True)
        self.booking_command_repo.create = AsyncMock(side_effect=lambda *, booking: booking)

        self.booking_query_repo = AsyncMock()

        self.commit_count = 0
        self.rollback_count = 0

    async def _commit(self) -> None:
        self.commit_count += 1

    async def rollback(self) -> None:
        self.rollback_count += 1

    @property
    def committed(self) -> bool:
        return self.commit_count > 0
