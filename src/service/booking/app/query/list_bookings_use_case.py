from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_filter import BookingFilter
from src.service.booking.app.dto.pagination import Page, Pagination
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    """
    Read-only ledger listing, newest first.

    Who may see what is decided by the caller: the HTTP layer passes the
    caller's own user_id, or None for an admin listing every booking.
    """

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
    async def execute(
        self,
        *,
        user_id: Optional[int],
        booking_filter: Optional[BookingFilter] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page[Booking]:
        pagination = Pagination.of(page=page, limit=limit)
        bookings, total = await self.booking_query_repo.list_bookings(
            user_id=user_id,
            booking_filter=booking_filter or BookingFilter(),
            pagination=pagination,
        )
        return Page(items=bookings, total=total, page=pagination.page, limit=pagination.limit)
