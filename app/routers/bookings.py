import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingResponse
from app.services import booking_service
from app.utils.auth import get_current_user
from app.utils.clock import get_now


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
    description="Request a rental period for an item. The owner of the item approves or rejects it later.",
)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Request a rental period for an item.
    Requires authentication.

    - **item_id**: ID of the item to rent.
    - **start_time**: Start of the rental period.
    - **end_time**: End of the rental period (after start_time).

    Returns the booking with status WAITING.
    """
    logger.debug(f"Creating booking for user: {current_user.id}, item_id: {booking.item_id}")
    return booking_service.create_booking(
        db, current_user.id, booking.item_id, booking.start_time, booking.end_time
    )


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Approve or reject a booking",
    description="Set the status of a WAITING booking to APPROVED or REJECTED.",
)
def resolve_booking(
    booking_id: int,
    approved: bool,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Approve or reject a booking.

    - **booking_id**: ID of the booking.
    - **approved**: true to approve, false to reject.
    """
    logger.debug(f"Resolving booking {booking_id} by user {current_user.id}, approved: {approved}")
    return booking_service.resolve_booking(db, current_user.id, booking_id, approved)


@router.get(
    "/owner",
    response_model=List[BookingResponse],
    summary="List bookings of own items",
    description="Bookings of the items owned by the current user, latest start first.",
)
def list_owner_bookings(
    state: str = Query("ALL", description="ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED"),
    offset: int = Query(0, alias="from", ge=0),
    size: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    current_user: User = Depends(get_current_user),
):
    return booking_service.list_for_owner(db, current_user.id, state, now, offset, size)


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
    description="Available to the booker and to the owner of the booked item.",
)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return booking_service.get_booking(db, current_user.id, booking_id)


@router.get(
    "/",
    response_model=List[BookingResponse],
    summary="List own bookings",
    description="Bookings made by the current user, latest start first.",
)
def list_bookings(
    state: str = Query("ALL", description="ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED"),
    offset: int = Query(0, alias="from", ge=0),
    size: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    current_user: User = Depends(get_current_user),
):
    """
    List the bookings of the current user.

    - **state**: Filter, case-insensitive (default ALL).
    - **from**: Number of bookings to skip.
    - **size**: Maximum number of bookings to return.
    """
    return booking_service.list_for_booker(db, current_user.id, state, now, offset, size)
