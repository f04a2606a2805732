"""Booking store: the queries the overlap guard needs."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import date
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.models.booking import Booking


class BookingStore(Protocol):
    """Read access to existing bookings of a unit."""

    async def list_unit_bookings(
        self,
        unit_id: uuid.UUID,
        start_date: date,
        end_date: date,
        *,
        exclude_booking_id: uuid.UUID | None = None,
    ) -> Sequence[Booking]:
        """Return candidate bookings of ``unit_id`` around ``[start_date, end_date]``.

        Implementations may return a superset; the guard applies the overlap
        predicate itself.
        """
        ...


class SqlBookingStore:
    """:class:`BookingStore` backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_unit_bookings(
        self,
        unit_id: uuid.UUID,
        start_date: date,
        end_date: date,
        *,
        exclude_booking_id: uuid.UUID | None = None,
    ) -> list[Booking]:
        stmt = select(Booking).where(
            Booking.unit_id == unit_id,
            Booking.start_date <= end_date,
            Booking.end_date >= start_date,
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(Booking.id != exclude_booking_id)

        result = await self.session.execute(stmt.order_by(Booking.start_date.asc()))
        return list(result.scalars().all())
