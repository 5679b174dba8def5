"""
Seat inventory, flight administration and read repositories against PostgreSQL
"""

import asyncio
from decimal import Decimal

import pytest
from uuid_utils.compat import uuid7

from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.command.update_flight_use_case import UpdateFlightUseCase
from src.service.booking.app.dto.booking_filter import BookingFilter
from src.service.booking.app.dto.flight_filter import FlightFilter
from src.service.booking.app.dto.pagination import Pagination
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.booking.driven_adapter.repo.flight_query_repo_impl import FlightQueryRepoImpl
from tests.service.booking.fixtures import KIX, build_flight
from tests.service.booking.integration.pg_support import (
    GatedUnitOfWork,
    seat_availability,
    stored_prices,
)


@pytest.mark.integration
class TestSeatRelease:
    @pytest.mark.asyncio
    async def test_release_is_idempotent(self, session_maker, uow_factory, pg_flight):
        # Arrange
        await CreateBookingUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, user_id=1, seat_numbers=['E1']
        )

        # Act
        async with uow_factory() as uow:
            first = await uow.flight_command_repo.release_seats(
                flight_id=pg_flight.id, seat_numbers=['E1', 'E2']
            )
            second = await uow.flight_command_repo.release_seats(
                flight_id=pg_flight.id, seat_numbers=['E1', 'E2']
            )
            await uow.commit()

        # Assert
        assert first == second == 2
        assert await seat_availability(session_maker, pg_flight) == {
            'E1': True,
            'E2': True,
            'B1': True,
        }

    @pytest.mark.asyncio
    async def test_release_counts_only_seats_on_the_flight(self, uow_factory, pg_flight):
        async with uow_factory() as uow:
            released = await uow.flight_command_repo.release_seats(
                flight_id=pg_flight.id, seat_numbers=['E1', 'Z9']
            )

        assert released == 1

    @pytest.mark.asyncio
    async def test_status_update_applies_only_from_expected_status(
        self, uow_factory, pg_flight
    ):
        booking = await CreateBookingUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, user_id=1, seat_numbers=['B1']
        )

        async with uow_factory() as uow:
            flips = [
                await uow.booking_command_repo.update_status_if_current(
                    booking_id=booking.id,
                    expected_status=BookingStatus.CONFIRMED,
                    new_status=BookingStatus.CANCELLED,
                    updated_at=booking.created_at,
                )
                for _ in range(2)
            ]
            await uow.commit()

        assert flips == [True, False]


@pytest.mark.integration
class TestFlightAdministration:
    @pytest.mark.asyncio
    async def test_concurrent_reprices_keep_min_price_of_committed_seats(
        self, session_maker, pg_flight
    ):
        """
        Given: admin t1 has repriced E1 to 20 but not committed yet
        When: admin t2 reprices E2 to 40 at the same time
        Then: t2 waits for the flight row, sees E1 = 20, and min_price ends at 20
        """
        # Arrange
        t1_repriced = asyncio.Event()
        t2_locking = asyncio.Event()

        async def hold_after_reprice(**_):
            t1_repriced.set()
            await t2_locking.wait()
            await asyncio.sleep(0.2)  # t2's SELECT ... FOR NO KEY UPDATE is now waiting

        async def mark_locking(**_):
            t2_locking.set()

        t1 = UpdateFlightUseCase(
            uow_factory=lambda: GatedUnitOfWork(
                session_maker, after={'update_seat_price': hold_after_reprice}
            )
        )
        t2 = UpdateFlightUseCase(
            uow_factory=lambda: GatedUnitOfWork(
                session_maker, before={'get_by_id_for_update': mark_locking}
            )
        )

        # Act
        t1_task = asyncio.create_task(
            t1.execute(flight_id=pg_flight.id, seat_prices={'E1': Decimal('20')})
        )
        await t1_repriced.wait()
        t2_flight, t1_flight = await asyncio.gather(
            t2.execute(flight_id=pg_flight.id, seat_prices={'E2': Decimal('40')}),
            t1_task,
        )

        # Assert
        prices, min_price = await stored_prices(session_maker, pg_flight)
        assert prices == {'E1': Decimal('20.00'), 'E2': Decimal('40.00'), 'B1': Decimal('300.00')}
        assert min_price == Decimal('20.00')
        assert t1_flight.min_price == Decimal('20.00')
        assert t2_flight.min_price == Decimal('20.00')

    @pytest.mark.asyncio
    async def test_reprice_leaves_held_seat_unavailable(
        self, session_maker, uow_factory, pg_flight
    ):
        await CreateBookingUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, user_id=1, seat_numbers=['B1']
        )

        updated = await UpdateFlightUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, arrival=KIX, seat_prices={'B1': Decimal('90')}
        )

        prices, min_price = await stored_prices(session_maker, pg_flight)
        assert prices['B1'] == Decimal('90.00')
        assert min_price == Decimal('90.00') == updated.min_price
        assert (await seat_availability(session_maker, pg_flight))['B1'] is False

        stored = await FlightQueryRepoImpl(session_factory=session_maker).get_by_id(
            flight_id=pg_flight.id
        )
        assert stored.arrival == KIX

    @pytest.mark.asyncio
    async def test_locking_read_of_unknown_flight(self, uow_factory):
        async with uow_factory() as uow:
            assert await uow.flight_command_repo.get_by_id_for_update(flight_id=uuid7()) is None


@pytest.mark.integration
class TestReadRepositories:
    @pytest.mark.asyncio
    async def test_flight_loads_seats_in_generated_order(self, session_maker, pg_flight):
        flight = await FlightQueryRepoImpl(session_factory=session_maker).get_by_id(
            flight_id=pg_flight.id
        )

        assert [seat.number for seat in flight.seats] == ['E1', 'E2', 'B1']
        assert flight.min_price == Decimal('100.00')
        assert flight.available_seats == 3

    @pytest.mark.asyncio
    async def test_list_flights_filters_city_case_insensitive(
        self, session_maker, uow_factory, pg_flight
    ):
        async with uow_factory() as uow:
            await uow.flight_command_repo.create(flight=build_flight(arrival=KIX))
            await uow.commit()

        flights, total = await FlightQueryRepoImpl(session_factory=session_maker).list_flights(
            flight_filter=FlightFilter(arrival_city='osaka'),
            pagination=Pagination.of(page=1, limit=10),
        )

        assert total == 1
        assert flights[0].arrival == KIX

    @pytest.mark.asyncio
    async def test_list_bookings_for_one_user_paginates(
        self, session_maker, uow_factory, pg_flight
    ):
        create_booking = CreateBookingUseCase(uow_factory=uow_factory)
        for seat_number in ['E1', 'E2']:
            await create_booking.execute(
                flight_id=pg_flight.id, user_id=1, seat_numbers=[seat_number]
            )
        await create_booking.execute(flight_id=pg_flight.id, user_id=2, seat_numbers=['B1'])

        bookings, total = await BookingQueryRepoImpl(session_factory=session_maker).list_bookings(
            user_id=1,
            booking_filter=BookingFilter(status=BookingStatus.CONFIRMED),
            pagination=Pagination.of(page=2, limit=1),
        )

        assert total == 2
        assert len(bookings) == 1
        assert bookings[0].user_id == 1
