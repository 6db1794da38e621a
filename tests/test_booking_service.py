from datetime import timedelta
import pytest

from app.exceptions import AuthorizationFailure, NotFoundError, StateConflict, ValidationFailure
from app.models.booking import Booking, BookingStatus
from app.services import booking_service


# create

def test_create_booking_success(test_db, item, booker, now):
    booking = booking_service.create_booking(
        test_db, booker.id, item.id, now + timedelta(days=1), now + timedelta(days=2)
    )
    assert booking.id is not None
    assert booking.status == BookingStatus.WAITING
    assert booking.item_id == item.id
    assert booking.booker_id == booker.id
    assert booking.start_time < booking.end_time


def test_create_booking_item_not_found(test_db, booker, now):
    with pytest.raises(NotFoundError) as e:
        booking_service.create_booking(test_db, booker.id, 999, now, now + timedelta(days=1))
    assert "Item with id:999" in e.value.message


def test_create_booking_item_not_available(test_db, make_item, owner, booker, now):
    closed = make_item(owner, available=False)
    with pytest.raises(ValidationFailure) as e:
        booking_service.create_booking(test_db, booker.id, closed.id, now, now + timedelta(days=1))
    assert "not available" in e.value.message


def test_unavailable_item_checked_before_requester(test_db, make_item, owner, now):
    closed = make_item(owner, available=False)
    with pytest.raises(ValidationFailure):
        booking_service.create_booking(test_db, 999, closed.id, now, now + timedelta(days=1))


def test_create_booking_requester_not_found(test_db, item, now):
    with pytest.raises(NotFoundError) as e:
        booking_service.create_booking(test_db, 999, item.id, now, now + timedelta(days=1))
    assert "User with id:999" in e.value.message


def test_owner_cannot_book_own_item(test_db, item, owner, now):
    with pytest.raises(AuthorizationFailure):
        booking_service.create_booking(test_db, owner.id, item.id, now, now + timedelta(days=1))


def test_zero_length_and_inverted_periods_have_distinct_messages(test_db, item, booker, now):
    with pytest.raises(ValidationFailure) as zero:
        booking_service.create_booking(test_db, booker.id, item.id, now, now)
    with pytest.raises(ValidationFailure) as inverted:
        booking_service.create_booking(test_db, booker.id, item.id, now, now - timedelta(hours=1))
    assert "coincides" in zero.value.message
    assert "after its end" in inverted.value.message
    assert zero.value.message != inverted.value.message
    assert test_db.query(Booking).count() == 0


def test_overlapping_bookings_are_accepted(test_db, item, booker, make_user, now):
    other = make_user()
    start, end = now + timedelta(days=1), now + timedelta(days=3)
    first = booking_service.create_booking(test_db, booker.id, item.id, start, end)
    second = booking_service.create_booking(test_db, other.id, item.id, start, end)
    assert first.id != second.id


# resolve

@pytest.mark.parametrize("approved, expected", [(True, BookingStatus.APPROVED), (False, BookingStatus.REJECTED)])
def test_resolve_booking(test_db, item, owner, booker, make_booking, approved, expected):
    booking = make_booking(item, booker, 1, 2)
    resolved = booking_service.resolve_booking(test_db, owner.id, booking.id, approved)
    assert resolved.status == expected
    test_db.expire_all()
    assert test_db.query(Booking).filter(Booking.id == booking.id).one().status == expected


@pytest.mark.parametrize("status", [BookingStatus.APPROVED, BookingStatus.REJECTED])
@pytest.mark.parametrize("approved", [True, False])
def test_resolve_final_booking_conflicts(test_db, item, owner, booker, make_booking, status, approved):
    booking = make_booking(item, booker, 1, 2, status=status)
    with pytest.raises(StateConflict):
        booking_service.resolve_booking(test_db, owner.id, booking.id, approved)


def test_status_changes_only_once(test_db, item, owner, booker, make_booking):
    booking = make_booking(item, booker, 1, 2)
    booking_service.resolve_booking(test_db, owner.id, booking.id, True)
    with pytest.raises(StateConflict):
        booking_service.resolve_booking(test_db, owner.id, booking.id, False)
    assert booking_service.get_booking(test_db, owner.id, booking.id).status == BookingStatus.APPROVED


def test_resolve_booking_not_found(test_db, owner):
    with pytest.raises(NotFoundError):
        booking_service.resolve_booking(test_db, owner.id, 999, True)


def test_resolve_status_checked_before_user(test_db, item, booker, make_booking):
    booking = make_booking(item, booker, 1, 2, status=BookingStatus.APPROVED)
    with pytest.raises(StateConflict):
        booking_service.resolve_booking(test_db, 999, booking.id, True)


def test_resolve_acting_user_not_found(test_db, item, booker, make_booking):
    booking = make_booking(item, booker, 1, 2)
    with pytest.raises(NotFoundError):
        booking_service.resolve_booking(test_db, 999, booking.id, True)


def test_booker_cannot_resolve_own_booking(test_db, item, booker, make_booking):
    booking = make_booking(item, booker, 1, 2)
    with pytest.raises(AuthorizationFailure):
        booking_service.resolve_booking(test_db, booker.id, booking.id, True)
    test_db.refresh(booking)
    assert booking.status == BookingStatus.WAITING


def test_resolve_does_not_check_item_ownership(test_db, item, booker, make_user, make_booking):
    # any user other than the booker can resolve today
    stranger = make_user()
    booking = make_booking(item, booker, 1, 2)
    resolved = booking_service.resolve_booking(test_db, stranger.id, booking.id, False)
    assert resolved.status == BookingStatus.REJECTED


# view

def test_get_booking_by_booker_and_owner(test_db, item, owner, booker, make_booking):
    booking = make_booking(item, booker, 1, 2)
    assert booking_service.get_booking(test_db, booker.id, booking.id).id == booking.id
    assert booking_service.get_booking(test_db, owner.id, booking.id).id == booking.id


def test_get_booking_by_stranger_denied(test_db, item, booker, make_user, make_booking):
    booking = make_booking(item, booker, 1, 2)
    with pytest.raises(AuthorizationFailure):
        booking_service.get_booking(test_db, make_user().id, booking.id)


def test_get_booking_not_found(test_db, booker):
    with pytest.raises(NotFoundError):
        booking_service.get_booking(test_db, booker.id, 999)


def test_get_booking_viewer_not_found(test_db, item, booker, make_booking):
    booking = make_booking(item, booker, 1, 2)
    with pytest.raises(NotFoundError):
        booking_service.get_booking(test_db, 999, booking.id)
