from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from src.service.booking.domain.entity.flight_entity import Flight


class IFlightCommandRepo(ABC):
    """
    Repository interface for flight / seat inventory writes

    Seats are only ever written through `reserve_seat_if_available`,
    `release_seats` and `update_seat_price`, never by overwriting
    the seat list.
    """

    @abstractmethod
    async def create(self, *, flight: Flight) -> Flight:
        pass

    @abstractmethod
    async def get_by_id_for_update(self, *, flight_id: UUID) -> Optional[Flight]:
        """
        Read the flight with its row locked until the transaction ends.

        Concurrent administrative edits of the same flight run one after another,
        each one reading the seat prices the previous one committed.
        """
        pass

    @abstractmethod
    async def update(self, *, flight: Flight) -> Flight:
        """Persist flight attributes, never the seat list or min_price"""
        pass

    @abstractmethod
    async def refresh_min_price(self, *, flight_id: UUID) -> Decimal:
        """Recompute min_price from the stored seat prices and return it"""
        pass

    @abstractmethod
    async def update_seat_price(
        self, *, flight_id: UUID, seat_number: str, price: Decimal
    ) -> bool:
        """Change one seat's price, leaving its availability untouched"""
        pass

    @abstractmethod
    async def reserve_seat_if_available(self, *, flight_id: UUID, seat_number: str) -> bool:
        """
        Conditional update: flip the seat to unavailable only if it is available now.

        Returns False when zero rows matched, i.e. another reservation got there first.
        """
        pass

    @abstractmethod
    async def release_seats(self, *, flight_id: UUID, seat_numbers: Sequence[str]) -> int:
        """
        Mark the named seats available; releasing an available seat is a no-op.

        Returns the number of seats that exist on the flight among `seat_numbers`.
        """
        pass
