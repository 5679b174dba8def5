from enum import StrEnum


class SeatClass(StrEnum):
    BUSINESS = 'business'
    FIRST = 'first'
    ECONOMY = 'economy'

    @property
    def prefix(self) -> str:
        """Seat number prefix, e.g. business seats are numbered B1..Bn"""
        return _SEAT_NUMBER_PREFIX[self]


_SEAT_NUMBER_PREFIX = {
    SeatClass.BUSINESS: 'B',
    SeatClass.FIRST: 'F',
    SeatClass.ECONOMY: 'E',
}

# Order in which a seat layout is materialized into the seat list
SEAT_LAYOUT_ORDER = (SeatClass.BUSINESS, SeatClass.FIRST, SeatClass.ECONOMY)
