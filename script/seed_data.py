#!/usr/bin/env python3
"""
Database Seed Script
Populate sample flights and print ready-to-use bearer tokens

Features:
1. Create Flights - a handful of flights with business / economy seat layouts
2. Issue Tokens - one admin token and one user token for manual API testing
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import text

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.service.booking.app.command.create_flight_use_case import CreateFlightUseCase
from src.service.booking.domain.entity.flight_entity import SeatClassConfig
from src.service.booking.domain.enum.seat_class import SeatClass
from src.service.booking.domain.enum.user_role import UserRole
from src.service.booking.domain.value_object.airport import Airport


TPE = Airport(
    code='TPE', name='Taiwan Taoyuan International Airport', city='Taipei', country='Taiwan'
)
NRT = Airport(code='NRT', name='Narita International Airport', city='Tokyo', country='Japan')
KIX = Airport(code='KIX', name='Kansai International Airport', city='Osaka', country='Japan')
HKG = Airport(
    code='HKG', name='Hong Kong International Airport', city='Hong Kong', country='China'
)

ADMIN_USER_ID = 1
TRAVELLER_USER_ID = 2


@dataclass
class FlightConfig:
    """Flight seed configuration"""

    airline: str
    flight_number: str
    departure: Airport
    arrival: Airport
    departs_in: timedelta
    duration: timedelta
    business_seats: int = 8
    economy_seats: int = 60


TEST_FLIGHTS = [
    FlightConfig(
        airline='EVA Air',
        flight_number='BR198',
        departure=TPE,
        arrival=NRT,
        departs_in=timedelta(days=7),
        duration=timedelta(hours=3, minutes=15),
    ),
    FlightConfig(
        airline='China Airlines',
        flight_number='CI156',
        departure=TPE,
        arrival=KIX,
        departs_in=timedelta(days=7, hours=4),
        duration=timedelta(hours=2, minutes=45),
    ),
    FlightConfig(
        airline='Cathay Pacific',
        flight_number='CX451',
        departure=HKG,
        arrival=TPE,
        departs_in=timedelta(days=8),
        duration=timedelta(hours=1, minutes=50),
    ),
    FlightConfig(
        airline='Starlux',
        flight_number='JX800',
        departure=TPE,
        arrival=NRT,
        departs_in=timedelta(days=9),
        duration=timedelta(hours=3),
        business_seats=4,
    ),
]


async def create_flights() -> None:
    print(f'✈️  Creating {len(TEST_FLIGHTS)} flights...')

    use_case = CreateFlightUseCase(uow_factory=container.unit_of_work)
    base_time = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)

    for config in TEST_FLIGHTS:
        departure_time = base_time + config.departs_in
        flight = await use_case.execute(
            airline=config.airline,
            flight_number=config.flight_number,
            departure=config.departure,
            arrival=config.arrival,
            departure_time=departure_time,
            arrival_time=departure_time + config.duration,
            seat_layout={
                SeatClass.BUSINESS: SeatClassConfig(count=config.business_seats, price=300),
                SeatClass.ECONOMY: SeatClassConfig(count=config.economy_seats, price=100),
            },
        )
        print(
            f'   ✅ {flight.airline} {flight.flight_number}: '
            f'ID={flight.id}, seats={flight.total_seats}'
        )


async def verify_data() -> None:
    print('🔍 Verifying seeded data...')
    async with container.database().session() as session:
        for table in ['flight', 'seat', 'booking']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM {table}'))
            print(f'   {table.capitalize()} count: {result.scalar()}')


def print_tokens() -> None:
    jwt_auth = container.jwt_auth()
    admin_token = jwt_auth.create_jwt_token(user_id=ADMIN_USER_ID, role=UserRole.ADMIN)
    traveller_token = jwt_auth.create_jwt_token(user_id=TRAVELLER_USER_ID, role=UserRole.USER)
    print('🔑 Bearer tokens:')
    print(f'   admin (user_id={ADMIN_USER_ID}): {admin_token}')
    print(f'   user  (user_id={TRAVELLER_USER_ID}): {traveller_token}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await create_db_and_tables()
        await create_flights()
        print()
        await verify_data()
        print()
        print_tokens()
        print('=' * 50)
        print('✅ Seeding completed!')
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1)
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
