"""Booking overlap guard: rejects double bookings of a unit.

Intervals are closed: a booking ending on the day another one starts is a
conflict, so same-day turnover on one unit is not allowed.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from rentledger.models.booking import Booking
from rentledger.repositories.bookings import BookingStore

logger = logging.getLogger(__name__)


def dates_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Return True when ``[start_a, end_a]`` and ``[start_b, end_b]`` share any day."""
    return start_a <= end_b and end_a >= start_b


async def check_overlap(
    store: BookingStore,
    unit_id: uuid.UUID,
    start_date: date,
    end_date: date,
    exclude_booking_id: uuid.UUID | None = None,
) -> Booking | None:
    """Return the first booking of ``unit_id`` that overlaps the given dates.

    Args:
        store: Booking store to query.
        unit_id: Unit being booked.
        start_date: First day of the proposed stay.
        end_date: Last day of the proposed stay.
        exclude_booking_id: Booking to ignore, i.e. the one being edited.

    Returns:
        The conflicting booking, or ``None`` when the unit is free.
    """
    candidates = await store.list_unit_bookings(
        unit_id,
        start_date,
        end_date,
        exclude_booking_id=exclude_booking_id,
    )
    for booking in candidates:
        if booking.id == exclude_booking_id:
            continue
        if dates_overlap(booking.start_date, booking.end_date, start_date, end_date):
            logger.info(
                "Booking %s on unit %s conflicts with %s..%s",
                booking.id,
                unit_id,
                start_date,
                end_date,
            )
            return booking
    return None
