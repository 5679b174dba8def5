from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class FlightModel(Base):
    __tablename__ = 'flight'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    airline: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    flight_number: Mapped[str] = mapped_column(String(20), nullable=False)

    departure_airport_code: Mapped[str] = mapped_column(String(10), nullable=False)
    departure_airport_name: Mapped[str] = mapped_column(String(255), nullable=False)
    departure_city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    departure_country: Mapped[str] = mapped_column(String(100), nullable=False)
    arrival_airport_code: Mapped[str] = mapped_column(String(10), nullable=False)
    arrival_airport_name: Mapped[str] = mapped_column(String(255), nullable=False)
    arrival_city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    arrival_country: Mapped[str] = mapped_column(String(100), nullable=False)

    departure_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    arrival_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    min_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    seats: Mapped[List['SeatModel']] = relationship(
        'SeatModel',
        order_by='SeatModel.position',
        cascade='all, delete-orphan',
        lazy='selectin',
    )


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (UniqueConstraint('flight_id', 'number', name='uq_seat_flight_number'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    flight_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('flight.id'), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(10), nullable=False)
    seat_class: Mapped[str] = mapped_column(String(20), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)  # Order within the flight
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
