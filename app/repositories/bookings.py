from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy.orm import Query, Session
from app.models.booking import Booking, BookingStatus
from app.models.item import Item


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def _newest_first(query: Query) -> Query:
    # ties keep insertion order
    return query.order_by(Booking.start_time.desc(), Booking.id.asc())


def _page(query: Query, offset: int = 0, limit: Optional[int] = None) -> Query:
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query


def find_by_booker(db: Session, booker_id: int, criterion=None, offset: int = 0, limit: Optional[int] = None) -> List[Booking]:
    query = db.query(Booking).filter(Booking.booker_id == booker_id)
    if criterion is not None:
        query = query.filter(criterion)
    return _page(_newest_first(query), offset, limit).all()


def find_by_item_owner(db: Session, owner_id: int, criterion=None, offset: int = 0, limit: Optional[int] = None) -> List[Booking]:
    query = db.query(Booking).join(Item, Booking.item_id == Item.id).filter(Item.owner_id == owner_id)
    if criterion is not None:
        query = query.filter(criterion)
    return _page(_newest_first(query), offset, limit).all()


def approved_started_by(db: Session, item_ids: Iterable[int], now: datetime, limit: Optional[int] = None) -> List[Booking]:
    """APPROVED bookings of the items with start <= now, latest start first."""
    query = (
        db.query(Booking)
        .filter(
            Booking.item_id.in_(list(item_ids)),
            Booking.status == BookingStatus.APPROVED,
            Booking.start_time <= now,
        )
        .order_by(Booking.start_time.desc(), Booking.id.asc())
    )
    return _page(query, limit=limit).all()


def approved_starting_after(db: Session, item_ids: Iterable[int], now: datetime, limit: Optional[int] = None) -> List[Booking]:
    """APPROVED bookings of the items with start > now, earliest start first."""
    query = (
        db.query(Booking)
        .filter(
            Booking.item_id.in_(list(item_ids)),
            Booking.status == BookingStatus.APPROVED,
            Booking.start_time > now,
        )
        .order_by(Booking.start_time.asc(), Booking.id.asc())
    )
    return _page(query, limit=limit).all()


def exists_completed(db: Session, item_id: int, booker_id: int, now: datetime) -> bool:
    query = db.query(Booking.id).filter(
        Booking.item_id == item_id,
        Booking.booker_id == booker_id,
        Booking.status == BookingStatus.APPROVED,
        Booking.end_time <= now,
    )
    return db.query(query.exists()).scalar()
