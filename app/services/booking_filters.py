"""
Booking filters used when listing bookings.

Each filter is a predicate over ``(start, end, status, now)``. The same
predicate evaluates to a plain ``bool`` when given a booking's values and to
a SQL criterion when given the ``Booking`` columns.
"""

import enum
from datetime import datetime
from typing import Union
from app.exceptions import UnknownFilterError
from app.models.booking import Booking, BookingStatus


class BookingFilter(str, enum.Enum):
    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, token: Union[str, "BookingFilter"]) -> "BookingFilter":
        if isinstance(token, cls):
            return token
        try:
            return cls[token.strip().upper()]
        except (AttributeError, KeyError):
            raise UnknownFilterError(token) from None


PREDICATES = {
    BookingFilter.ALL: lambda start, end, status, now: True,
    BookingFilter.CURRENT: lambda start, end, status, now: (start < now) & (end > now),
    BookingFilter.PAST: lambda start, end, status, now: end < now,
    BookingFilter.FUTURE: lambda start, end, status, now: start > now,
    BookingFilter.WAITING: lambda start, end, status, now: status == BookingStatus.WAITING,
    BookingFilter.REJECTED: lambda start, end, status, now: status == BookingStatus.REJECTED,
}


def criterion(booking_filter: BookingFilter, now: datetime):
    """SQL criterion for the filter, or None when it selects everything."""
    clause = PREDICATES[booking_filter](Booking.start_time, Booking.end_time, Booking.status, now)
    return None if clause is True else clause


def matches(booking: Booking, booking_filter: BookingFilter, now: datetime) -> bool:
    return bool(PREDICATES[booking_filter](booking.start_time, booking.end_time, booking.status, now))
