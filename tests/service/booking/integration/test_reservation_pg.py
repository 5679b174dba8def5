"""
Reservation and cancellation against PostgreSQL

Interleavings are pinned with GatedUnitOfWork: one transaction is held at a
known point (after a seat flip, before a flip) while the other runs.
"""

import asyncio
from decimal import Decimal

import attrs
import pytest

from src.platform.exception.exceptions import InternalError
from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.command.update_booking_status_to_cancelled_use_case import (
    UpdateBookingToCancelledUseCase,
)
from src.service.booking.domain.booking_errors import (
    InvalidStateError,
    SeatConflictError,
    SeatUnavailableError,
)
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.user_role import UserRole
from src.service.booking.domain.value_object.principal import Principal
from src.service.booking.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from tests.service.booking.fixtures import build_booking
from tests.service.booking.integration.pg_support import GatedUnitOfWork, seat_availability


U1 = Principal(user_id=1, role=UserRole.USER)
U2 = Principal(user_id=2, role=UserRole.USER)


@pytest.mark.integration
class TestReservationRaces:
    @pytest.mark.asyncio
    async def test_opposite_order_requests_conflict_instead_of_deadlocking(
        self, session_maker, pg_flight
    ):
        """
        Given: u1 asks for [E1, E2] and u2 for [E2, E1]
        When: u1 holds its first flipped row while u2 starts flipping
        Then: u2 waits on the same first row, loses it once u1 commits and
              gets SeatConflict(E1); no deadlock, no INTERNAL error
        """
        # Arrange
        u1_holds_first_seat = asyncio.Event()
        u2_is_flipping = asyncio.Event()

        async def hold_after_first_flip(*, seat_number, **_):
            if u1_holds_first_seat.is_set():
                return
            u1_holds_first_seat.set()
            await u2_is_flipping.wait()
            await asyncio.sleep(0.2)  # u2's UPDATE reaches the server and blocks

        async def mark_flipping(**_):
            u2_is_flipping.set()

        u1 = CreateBookingUseCase(
            uow_factory=lambda: GatedUnitOfWork(
                session_maker, after={'reserve_seat_if_available': hold_after_first_flip}
            )
        )
        u2 = CreateBookingUseCase(
            uow_factory=lambda: GatedUnitOfWork(
                session_maker, before={'reserve_seat_if_available': mark_flipping}
            )
        )

        # Act
        u1_task = asyncio.create_task(
            u1.execute(flight_id=pg_flight.id, user_id=U1.user_id, seat_numbers=['E1', 'E2'])
        )
        await u1_holds_first_seat.wait()
        u2_result, u1_result = await asyncio.gather(
            u2.execute(flight_id=pg_flight.id, user_id=U2.user_id, seat_numbers=['E2', 'E1']),
            u1_task,
            return_exceptions=True,
        )

        # Assert
        assert isinstance(u1_result, Booking)
        assert u1_result.seat_numbers == ['E1', 'E2']
        assert isinstance(u2_result, SeatConflictError)
        assert u2_result.seat_number == 'E1'
        assert u2_result.code == 'SEAT_CONFLICT'
        assert await seat_availability(session_maker, pg_flight) == {
            'E1': False,
            'E2': False,
            'B1': True,
        }

    @pytest.mark.asyncio
    async def test_stale_read_loses_conditional_update(
        self, session_maker, uow_factory, pg_flight
    ):
        """
        Given: u2 has read the flight while E1 was still available
        When: u1 books [E1, B1] and commits before u2's first flip
        Then: u2 gets SeatConflict(E1) and E2 is still available
        """
        # Arrange
        u2_has_read = asyncio.Event()
        u1_committed = asyncio.Event()

        async def wait_for_u1(**_):
            u2_has_read.set()
            await u1_committed.wait()

        u2 = CreateBookingUseCase(
            uow_factory=lambda: GatedUnitOfWork(
                session_maker, before={'reserve_seat_if_available': wait_for_u1}
            )
        )
        u2_task = asyncio.create_task(
            u2.execute(flight_id=pg_flight.id, user_id=U2.user_id, seat_numbers=['E1', 'E2'])
        )
        await u2_has_read.wait()

        # Act
        u1_booking = await CreateBookingUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, user_id=U1.user_id, seat_numbers=['E1', 'B1']
        )
        u1_committed.set()

        # Assert
        with pytest.raises(SeatConflictError) as exc_info:
            await u2_task
        assert exc_info.value.seat_number == 'E1'
        assert exc_info.value.code == 'SEAT_CONFLICT'
        assert u1_booking.total_price == Decimal('400.00')
        assert await seat_availability(session_maker, pg_flight) == {
            'E1': False,
            'E2': True,
            'B1': False,
        }

    @pytest.mark.asyncio
    async def test_many_overlapping_requests_book_each_seat_once(
        self, session_maker, uow_factory, pg_flight
    ):
        use_case = CreateBookingUseCase(uow_factory=uow_factory)
        requests = [['E1', 'E2'], ['E2', 'B1'], ['B1', 'E1'], ['E2', 'E1'], ['B1']]

        results = await asyncio.gather(
            *(
                use_case.execute(flight_id=pg_flight.id, user_id=i, seat_numbers=seats)
                for i, seats in enumerate(requests, start=1)
            ),
            return_exceptions=True,
        )

        confirmed = [r for r in results if isinstance(r, Booking)]
        failures = [r for r in results if not isinstance(r, Booking)]
        assert all(isinstance(f, (SeatConflictError, SeatUnavailableError)) for f in failures)
        held = [number for booking in confirmed for number in booking.seat_numbers]
        assert len(held) == len(set(held))
        availability = await seat_availability(session_maker, pg_flight)
        assert {number for number, free in availability.items() if not free} == set(held)


@pytest.mark.integration
class TestReservationAtomicity:
    @pytest.mark.asyncio
    async def test_reference_scenario(self, session_maker, uow_factory, pg_flight):
        """
        Given: F = [E1 $100, E2 $100, B1 $300]
        When: u1 books [E1, B1], u2 tries [E1, E2], u1 cancels, u2 retries
        Then: 400 for u1, u2 rejected on E1 with E2 free, cancel frees E1/B1,
              u2 ends up with E1/E2 for 200
        """
        create_booking = CreateBookingUseCase(uow_factory=uow_factory)
        cancel_booking = UpdateBookingToCancelledUseCase(uow_factory=uow_factory)

        u1_booking = await create_booking.execute(
            flight_id=pg_flight.id, user_id=U1.user_id, seat_numbers=['E1', 'B1']
        )
        assert u1_booking.total_price == Decimal('400.00')
        assert await seat_availability(session_maker, pg_flight) == {
            'E1': False,
            'E2': True,
            'B1': False,
        }

        with pytest.raises(SeatUnavailableError) as exc_info:
            await create_booking.execute(
                flight_id=pg_flight.id, user_id=U2.user_id, seat_numbers=['E1', 'E2']
            )
        assert exc_info.value.seat_number == 'E1'
        assert (await seat_availability(session_maker, pg_flight))['E2'] is True

        cancelled = await cancel_booking.execute(booking_id=u1_booking.id, principal=U1)
        assert cancelled.status == BookingStatus.CANCELLED
        assert await seat_availability(session_maker, pg_flight) == {
            'E1': True,
            'E2': True,
            'B1': True,
        }

        u2_booking = await create_booking.execute(
            flight_id=pg_flight.id, user_id=U2.user_id, seat_numbers=['E1', 'E2']
        )
        assert u2_booking.total_price == Decimal('200.00')

        stored = await BookingQueryRepoImpl(session_factory=session_maker).get_by_id(
            booking_id=u1_booking.id
        )
        assert stored.status == BookingStatus.CANCELLED
        assert stored.seat_numbers == ['E1', 'B1']
        assert stored.total_price == Decimal('400.00')

        with pytest.raises(InvalidStateError):
            await cancel_booking.execute(booking_id=u1_booking.id, principal=U1)

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_seat_flips(
        self, session_maker, uow_factory, pg_flight
    ):
        """
        Given: a booking row already exists
        When: a transaction flips E1 and inserts a booking with the same id
        Then: INTERNAL is raised and E1 is available again
        """
        # Arrange
        existing = await CreateBookingUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, user_id=U1.user_id, seat_numbers=['B1']
        )
        duplicate = attrs.evolve(
            build_booking(flight=pg_flight, seat_numbers=['E1'], user_id=U2.user_id),
            id=existing.id,
        )

        # Act
        with pytest.raises(InternalError):
            async with uow_factory() as uow:
                assert await uow.flight_command_repo.reserve_seat_if_available(
                    flight_id=pg_flight.id, seat_number='E1'
                )
                await uow.booking_command_repo.create(booking=duplicate)
                await uow.commit()

        # Assert
        assert await seat_availability(session_maker, pg_flight) == {
            'E1': True,
            'E2': True,
            'B1': False,
        }

    @pytest.mark.asyncio
    async def test_conditional_update_matches_an_available_seat_once(
        self, uow_factory, pg_flight
    ):
        async with uow_factory() as uow:
            first = await uow.flight_command_repo.reserve_seat_if_available(
                flight_id=pg_flight.id, seat_number='E1'
            )
            second = await uow.flight_command_repo.reserve_seat_if_available(
                flight_id=pg_flight.id, seat_number='E1'
            )
            unknown = await uow.flight_command_repo.reserve_seat_if_available(
                flight_id=pg_flight.id, seat_number='Z9'
            )

        assert (first, second, unknown) == (True, False, False)

    @pytest.mark.asyncio
    async def test_concurrent_cancels_release_once(self, session_maker, uow_factory, pg_flight):
        booking = await CreateBookingUseCase(uow_factory=uow_factory).execute(
            flight_id=pg_flight.id, user_id=U1.user_id, seat_numbers=['E1', 'B1']
        )
        cancel_booking = UpdateBookingToCancelledUseCase(uow_factory=uow_factory)

        results = await asyncio.gather(
            cancel_booking.execute(booking_id=booking.id, principal=U1),
            cancel_booking.execute(booking_id=booking.id, principal=U1),
            return_exceptions=True,
        )

        assert sum(1 for r in results if isinstance(r, Booking)) == 1
        assert sum(1 for r in results if isinstance(r, InvalidStateError)) == 1
        assert all((await seat_availability(session_maker, pg_flight)).values())
