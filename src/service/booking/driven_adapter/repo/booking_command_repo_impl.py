from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.model_mapper import (
    booking_to_entity,
    booking_to_model,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        self.session.add(booking_to_model(booking))
        # Flush now so constraint violations surface inside the reservation, before commit
        await self.session.flush()
        return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.id == booking_id)
        )
        db_booking = result.scalar_one_or_none()
        return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def update_status_if_current(
        self,
        *,
        booking_id: UUID,
        expected_status: BookingStatus,
        new_status: BookingStatus,
        updated_at: datetime,
    ) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking_id, BookingModel.status == expected_status.value)
            .values(status=new_status.value, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]
