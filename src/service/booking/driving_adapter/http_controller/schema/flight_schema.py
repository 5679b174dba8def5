from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.service.booking.domain.entity.flight_entity import Flight
from src.service.booking.domain.enum.seat_class import SeatClass
from src.service.booking.domain.value_object.airport import Airport
from src.service.booking.domain.value_object.seat_selection import SeatSelection
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import SeatResponse


class AirportSchema(BaseModel):
    code: str
    name: str
    city: str
    country: str

    def to_value_object(self) -> Airport:
        return Airport(code=self.code, name=self.name, city=self.city, country=self.country)

    @classmethod
    def from_value_object(cls, airport: Airport) -> 'AirportSchema':
        return cls(code=airport.code, name=airport.name, city=airport.city, country=airport.country)


class SeatClassLayoutRequest(BaseModel):
    count: int = Field(ge=1)
    price: Decimal = Field(gt=0)


_AIRPORT_EXAMPLE_TPE = {
    'code': 'TPE',
    'name': 'Taiwan Taoyuan International Airport',
    'city': 'Taipei',
    'country': 'Taiwan',
}
_AIRPORT_EXAMPLE_NRT = {
    'code': 'NRT',
    'name': 'Narita International Airport',
    'city': 'Tokyo',
    'country': 'Japan',
}


class FlightCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'airline': 'EVA Air',
                'flight_number': 'BR198',
                'departure': _AIRPORT_EXAMPLE_TPE,
                'arrival': _AIRPORT_EXAMPLE_NRT,
                'departure_time': '2025-03-01T01:00:00Z',
                'arrival_time': '2025-03-01T04:15:00Z',
                'seat_layout': {
                    'business': {'count': 2, 'price': '300.00'},
                    'economy': {'count': 30, 'price': '100.00'},
                },
            }
        }
    )

    airline: str = Field(min_length=1)
    flight_number: str = Field(min_length=1)
    departure: AirportSchema
    arrival: AirportSchema
    departure_time: datetime
    arrival_time: datetime
    seat_layout: Dict[SeatClass, SeatClassLayoutRequest]


class FlightUpdateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'departure_time': '2025-03-01T02:00:00Z',
                'arrival_time': '2025-03-01T05:15:00Z',
                'seat_prices': {'E1': '120.00'},
            }
        }
    )

    airline: Optional[str] = None
    flight_number: Optional[str] = None
    departure: Optional[AirportSchema] = None
    arrival: Optional[AirportSchema] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    seat_prices: Optional[Dict[str, Decimal]] = None


class FlightSummaryResponse(BaseModel):
    """Catalog view of a flight, without the seat list"""

    id: UUID
    airline: str
    flight_number: str
    departure: AirportSchema
    arrival: AirportSchema
    departure_time: datetime
    arrival_time: datetime
    duration_minutes: int
    min_price: Decimal
    total_seats: int
    available_seats: int

    @classmethod
    def from_entity(cls, flight: Flight) -> 'FlightSummaryResponse':
        return cls(
            id=flight.id,
            airline=flight.airline,
            flight_number=flight.flight_number,
            departure=AirportSchema.from_value_object(flight.departure),
            arrival=AirportSchema.from_value_object(flight.arrival),
            departure_time=flight.departure_time,
            arrival_time=flight.arrival_time,
            duration_minutes=flight.duration_minutes,
            min_price=flight.min_price,
            total_seats=flight.total_seats,
            available_seats=flight.available_seats,
        )


class FlightResponse(FlightSummaryResponse):
    seats: List[SeatResponse]

    @classmethod
    def from_entity(cls, flight: Flight) -> 'FlightResponse':
        summary = FlightSummaryResponse.from_entity(flight)
        return cls(
            **summary.model_dump(),
            seats=[SeatResponse.from_entity(seat) for seat in flight.seats],
        )


class FlightListResponse(BaseModel):
    items: List[FlightSummaryResponse]
    total: int
    page: int
    limit: int


class SeatLookupRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={'example': {'seat_numbers': ['E1', 'B1']}})

    seat_numbers: List[str] = Field(min_length=1)


class SeatLookupResponse(BaseModel):
    flight_id: UUID
    seats: List[SeatResponse]
    total_price: Decimal

    @classmethod
    def from_selection(cls, *, flight_id: UUID, selection: SeatSelection) -> 'SeatLookupResponse':
        return cls(
            flight_id=flight_id,
            seats=[SeatResponse.from_entity(seat) for seat in selection.seats],
            total_price=selection.total_price,
        )
