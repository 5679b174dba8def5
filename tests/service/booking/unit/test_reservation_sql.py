"""
The conditional updates behind reservation, release and repricing, compiled for PostgreSQL
"""

import pytest
from sqlalchemy.dialects import postgresql
from uuid_utils.compat import uuid7

from src.service.booking.driven_adapter.repo.flight_command_repo_impl import (
    build_refresh_min_price_statement,
    build_release_seats_statement,
    build_reserve_seat_statement,
)


def _compile(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect())).replace('\n', ' ')


@pytest.mark.unit
class TestReservationStatements:
    def test_reserve_is_guarded_by_current_availability(self):
        sql = _compile(build_reserve_seat_statement(flight_id=uuid7(), seat_number='E1'))

        assert sql.startswith('UPDATE seat SET is_available=')
        assert 'seat.flight_id = ' in sql
        assert 'seat.number = ' in sql
        assert 'seat.is_available IS true' in sql

    def test_release_has_no_availability_guard(self):
        sql = _compile(
            build_release_seats_statement(flight_id=uuid7(), seat_numbers=['E1', 'B1'])
        )

        assert sql.startswith('UPDATE seat SET is_available=')
        assert 'seat.number IN ' in sql
        assert 'is_available IS' not in sql

    def test_min_price_is_recomputed_from_stored_seats(self):
        sql = _compile(build_refresh_min_price_statement(flight_id=uuid7()))

        assert sql.startswith('UPDATE flight SET ')
        assert 'min_price=(SELECT min(seat.price)' in sql
        assert 'FROM seat WHERE seat.flight_id = ' in sql
        assert sql.endswith('RETURNING flight.min_price')
