"""
Booking lifecycle: creation, approval/rejection, viewing and listing.

Every operation takes the acting user's id and, where time matters, the
``now`` of the calling request. Nothing here reads the wall clock.

Known gaps kept as-is:

* no overlap check, two bookings of the same item may share a period;
* ``resolve_booking`` only refuses the booker, it does not check that the
  acting user owns the item;
* two concurrent resolutions of one WAITING booking both succeed and the
  last commit wins.
"""

import logging
from datetime import datetime
from typing import List, Optional, Union
from sqlalchemy.orm import Session
from app.exceptions import AuthorizationFailure, NotFoundError, StateConflict, ValidationFailure
from app.models.booking import Booking, BookingStatus
from app.repositories import bookings as booking_repository
from app.services.booking_filters import BookingFilter, criterion
from app.services.common import get_item, get_user


logger = logging.getLogger(__name__)


def _get_booking(db: Session, booking_id: int) -> Booking:
    booking = booking_repository.get_booking(db, booking_id)
    if not booking:
        logger.warning(f"Booking not found: {booking_id}")
        raise NotFoundError("Booking", booking_id)
    return booking


def create_booking(db: Session, requester_id: int, item_id: int, start: datetime, end: datetime) -> Booking:
    """
    Request a rental of ``item_id`` for ``[start, end)``.

    Checks run in a fixed order and the first violation wins: item exists,
    item available, requester exists, requester is not the owner, non-empty
    period, period not inverted. The booking starts out WAITING.
    """
    item = get_item(db, item_id)

    if not item.available:
        logger.warning(f"Item {item_id} is not available for rent")
        raise ValidationFailure(
            f"Item with id:{item_id} is not available for rent.",
            details={"item_id": item_id},
        )

    booker = get_user(db, requester_id)

    if item.owner_id == booker.id:
        logger.warning(f"User {requester_id} tried to book own item {item_id}")
        raise AuthorizationFailure(
            f"Access denied. User with id:{requester_id} owns item with id:{item_id}.",
            details={"user_id": requester_id, "item_id": item_id},
        )

    if start == end:
        raise ValidationFailure(
            "The start of the rental period coincides with its end.",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )

    if end < start:
        raise ValidationFailure(
            "The start of the rental period is after its end.",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )

    booking = Booking(
        item_id=item.id,
        booker_id=booker.id,
        start_time=start,
        end_time=end,
        status=BookingStatus.WAITING,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info(f"Created booking {booking.id}: item {item_id}, booker {requester_id}, {start} - {end}")
    return booking


def resolve_booking(db: Session, owner_id: int, booking_id: int, approved: bool) -> Booking:
    """
    Approve or reject a WAITING booking.

    The status leaves WAITING exactly once; any later attempt fails with
    ``StateConflict`` whatever the decision.
    """
    booking = _get_booking(db, booking_id)

    if booking.status != BookingStatus.WAITING:
        logger.warning(f"Booking {booking_id} already has status {booking.status.value}")
        raise StateConflict(
            f"The status of booking with id:{booking_id} has already been set to {booking.status.value}.",
            details={"booking_id": booking_id, "status": booking.status.value},
        )

    get_user(db, owner_id)

    if booking.booker_id == owner_id:
        logger.warning(f"Booker {owner_id} tried to resolve own booking {booking_id}")
        raise AuthorizationFailure(
            f"Access denied. User with id:{owner_id} is the booker of booking with id:{booking_id}.",
            details={"user_id": owner_id, "booking_id": booking_id},
        )

    booking.status = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
    db.commit()
    db.refresh(booking)
    logger.info(f"Booking {booking_id} set to {booking.status.value} by user {owner_id}")
    return booking


def get_booking(db: Session, viewer_id: int, booking_id: int) -> Booking:
    booking = _get_booking(db, booking_id)
    get_user(db, viewer_id)

    if viewer_id not in (booking.booker_id, booking.item.owner_id):
        logger.warning(f"User {viewer_id} is not a party to booking {booking_id}")
        raise AuthorizationFailure(
            f"Access denied. User with id:{viewer_id} is neither the booker nor the owner "
            f"of the item of booking with id:{booking_id}.",
            details={"user_id": viewer_id, "booking_id": booking_id},
        )
    return booking


def list_for_booker(
    db: Session,
    booker_id: int,
    state: Union[str, BookingFilter],
    now: datetime,
    offset: int = 0,
    limit: Optional[int] = None,
) -> List[Booking]:
    """Bookings made by ``booker_id`` matching ``state``, latest start first."""
    get_user(db, booker_id)
    booking_filter = BookingFilter.parse(state)
    return booking_repository.find_by_booker(db, booker_id, criterion(booking_filter, now), offset, limit)


def list_for_owner(
    db: Session,
    owner_id: int,
    state: Union[str, BookingFilter],
    now: datetime,
    offset: int = 0,
    limit: Optional[int] = None,
) -> List[Booking]:
    """Bookings of items owned by ``owner_id`` matching ``state``, latest start first."""
    get_user(db, owner_id)
    booking_filter = BookingFilter.parse(state)
    return booking_repository.find_by_item_owner(db, owner_id, criterion(booking_filter, now), offset, limit)
