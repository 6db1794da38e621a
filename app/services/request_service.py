import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError
from app.models.item_request import ItemRequest
from app.services.common import get_user


logger = logging.getLogger(__name__)


def create_request(db: Session, requester_id: int, description: str, now: datetime) -> ItemRequest:
    get_user(db, requester_id)
    request = ItemRequest(description=description, requester_id=requester_id, created=now)
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info(f"Created item request {request.id} by user {requester_id}")
    return request


def list_own_requests(db: Session, requester_id: int) -> List[ItemRequest]:
    get_user(db, requester_id)
    return (
        db.query(ItemRequest)
        .filter(ItemRequest.requester_id == requester_id)
        .order_by(ItemRequest.created.desc(), ItemRequest.id.desc())
        .all()
    )


def list_other_requests(db: Session, user_id: int, offset: int = 0, limit: Optional[int] = None) -> List[ItemRequest]:
    """Requests published by everybody except ``user_id``, newest first."""
    get_user(db, user_id)
    query = (
        db.query(ItemRequest)
        .filter(ItemRequest.requester_id != user_id)
        .order_by(ItemRequest.created.desc(), ItemRequest.id.desc())
    )
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_request(db: Session, user_id: int, request_id: int) -> ItemRequest:
    get_user(db, user_id)
    request = db.query(ItemRequest).filter(ItemRequest.id == request_id).first()
    if not request:
        raise NotFoundError("ItemRequest", request_id)
    return request
