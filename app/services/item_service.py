import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.exceptions import AuthorizationFailure, NotFoundError
from app.models.item import Item
from app.models.item_request import ItemRequest
from app.schemas.booking import BookingShort
from app.schemas.comment import CommentResponse
from app.schemas.item import ItemCreate, ItemDetail, ItemUpdate
from app.services import comment_service, item_bookings
from app.services.common import get_item, get_user
from app.utils.validation_helpers import blank_to_none


logger = logging.getLogger(__name__)


def _check_owner(item: Item, user_id: int, action: str) -> None:
    if item.owner_id != user_id:
        logger.warning(f"User {user_id} is not the owner of item {item.id}")
        raise AuthorizationFailure(
            f"Only the owner may {action} item with id:{item.id}.",
            details={"user_id": user_id, "item_id": item.id},
        )


def _detail(item: Item, comments, last_booking=None, next_booking=None) -> ItemDetail:
    return ItemDetail(
        id=item.id,
        name=item.name,
        description=item.description,
        available=item.available,
        request_id=item.request_id,
        last_booking=BookingShort.model_validate(last_booking) if last_booking else None,
        next_booking=BookingShort.model_validate(next_booking) if next_booking else None,
        comments=[CommentResponse.from_comment(comment) for comment in comments],
    )


def create_item(db: Session, owner_id: int, data: ItemCreate) -> Item:
    get_user(db, owner_id)

    if data.request_id is not None:
        request = db.query(ItemRequest).filter(ItemRequest.id == data.request_id).first()
        if not request:
            raise NotFoundError("ItemRequest", data.request_id)

    item = Item(**data.model_dump(), owner_id=owner_id)
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Created item {item.id} for owner {owner_id}")
    return item


def update_item(db: Session, owner_id: int, item_id: int, data: ItemUpdate) -> Item:
    """Partial update; fields left out or blank keep their current value."""
    get_user(db, owner_id)
    item = get_item(db, item_id)
    _check_owner(item, owner_id, "edit")

    for key, value in data.model_dump(exclude_unset=True).items():
        value = blank_to_none(value)
        if value is not None:
            setattr(item, key, value)

    db.commit()
    db.refresh(item)
    logger.debug(f"Updated item {item_id}")
    return item


def delete_item(db: Session, owner_id: int, item_id: int) -> None:
    """Administrative delete: the item's bookings and comments are removed with it."""
    get_user(db, owner_id)
    item = get_item(db, item_id)
    _check_owner(item, owner_id, "delete")
    db.delete(item)
    db.commit()
    logger.info(f"Deleted item {item_id}")


def get_item_detail(db: Session, viewer_id: int, item_id: int, now: datetime) -> ItemDetail:
    """
    Item with its comments; last/next approved bookings are only revealed
    when the viewer owns the item.
    """
    get_user(db, viewer_id)
    item = get_item(db, item_id)
    comments = comment_service.comments_for_item(db, item_id)

    if item.owner_id != viewer_id:
        return _detail(item, comments)

    return _detail(
        item,
        comments,
        item_bookings.last_approved_booking(db, item_id, now),
        item_bookings.next_approved_booking(db, item_id, now),
    )


def list_owner_items(db: Session, owner_id: int, now: datetime, offset: int = 0, limit: Optional[int] = None) -> List[ItemDetail]:
    get_user(db, owner_id)
    query = db.query(Item).filter(Item.owner_id == owner_id).order_by(Item.id)
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    items = query.all()

    item_ids = [item.id for item in items]
    last_bookings = item_bookings.last_approved_bookings(db, item_ids, now)
    next_bookings = item_bookings.next_approved_bookings(db, item_ids, now)
    comments = comment_service.comments_for_items(db, item_ids)

    return [
        _detail(item, comments[item.id], last_bookings.get(item.id), next_bookings.get(item.id))
        for item in items
    ]


def search_items(db: Session, text: str, offset: int = 0, limit: Optional[int] = None) -> List[Item]:
    """Available items whose name or description contains ``text``, case-insensitively."""
    if not text or not text.strip():
        return []
    pattern = f"%{text.strip().lower()}%"
    query = (
        db.query(Item)
        .filter(
            Item.available.is_(True),
            or_(func.lower(Item.name).like(pattern), func.lower(Item.description).like(pattern)),
        )
        .order_by(Item.id)
    )
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()
