from datetime import date
from enum import StrEnum
from typing import Optional

import attrs


class FlightOrderBy(StrEnum):
    DEPARTURE_TIME = 'departure_time'
    PRICE = 'price'
    DURATION = 'duration'


class SortOrder(StrEnum):
    ASC = 'asc'
    DESC = 'desc'


@attrs.define(frozen=True)
class FlightFilter:
    airline: Optional[str] = None
    departure_city: Optional[str] = None
    arrival_city: Optional[str] = None
    departure_date: Optional[date] = None
    order_by: FlightOrderBy = FlightOrderBy.DEPARTURE_TIME
    order: SortOrder = SortOrder.ASC
