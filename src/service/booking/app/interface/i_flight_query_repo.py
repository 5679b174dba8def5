from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.service.booking.app.dto.flight_filter import FlightFilter
from src.service.booking.app.dto.pagination import Pagination
from src.service.booking.domain.entity.flight_entity import Flight


class IFlightQueryRepo(ABC):
    """Repository interface for flight read operations"""

    @abstractmethod
    async def get_by_id(self, *, flight_id: UUID) -> Optional[Flight]:
        """Flight with its full seat list, ordered as generated"""
        pass

    @abstractmethod
    async def list_flights(
        self, *, flight_filter: FlightFilter, pagination: Pagination
    ) -> Tuple[List[Flight], int]:
        """Returns one page of flights and the total count matching the filter"""
        pass
