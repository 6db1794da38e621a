"""Last and next APPROVED booking per item, used to decorate item views for their owner."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from app.models.booking import Booking
from app.repositories import bookings as booking_repository


def _first_per_item(bookings: List[Booking]) -> Dict[int, Booking]:
    # the query's order decides; later matches for the same item are dropped
    by_item = {}
    for booking in bookings:
        by_item.setdefault(booking.item_id, booking)
    return by_item


def last_approved_booking(db: Session, item_id: int, now: datetime) -> Optional[Booking]:
    """The APPROVED booking with the latest start not after ``now``."""
    bookings = booking_repository.approved_started_by(db, [item_id], now, limit=1)
    return bookings[0] if bookings else None


def next_approved_booking(db: Session, item_id: int, now: datetime) -> Optional[Booking]:
    """The APPROVED booking with the earliest start after ``now``."""
    bookings = booking_repository.approved_starting_after(db, [item_id], now, limit=1)
    return bookings[0] if bookings else None


def last_approved_bookings(db: Session, item_ids: Iterable[int], now: datetime) -> Dict[int, Booking]:
    item_ids = list(item_ids)
    if not item_ids:
        return {}
    return _first_per_item(booking_repository.approved_started_by(db, item_ids, now))


def next_approved_bookings(db: Session, item_ids: Iterable[int], now: datetime) -> Dict[int, Booking]:
    item_ids = list(item_ids)
    if not item_ids:
        return {}
    return _first_per_item(booking_repository.approved_starting_after(db, item_ids, now))
