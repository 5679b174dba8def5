from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.booking_errors import BookingNotFoundError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.value_object.principal import Principal


class GetBookingUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def execute(self, *, booking_id: UUID, principal: Principal) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        # Another user's booking is reported as missing, not forbidden
        if booking is None or not principal.can_access(owner_id=booking.user_id):
            raise BookingNotFoundError(booking_id)
        return booking
