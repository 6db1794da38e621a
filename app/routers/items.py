import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models.user import User
from app.schemas.comment import CommentCreate, CommentResponse
from app.schemas.item import ItemCreate, ItemDetail, ItemResponse, ItemUpdate
from app.services import comment_service, item_service
from app.utils.auth import get_current_user
from app.utils.clock import get_now


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/items",
    tags=["items"],
)


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    List a new item for rent.
    Optionally answers an item request via **request_id**.
    """
    return item_service.create_item(db, current_user.id, item)


@router.get("/", response_model=List[ItemDetail])
def get_own_items(
    offset: int = Query(0, alias="from", ge=0),
    size: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    current_user: User = Depends(get_current_user),
):
    """
    Items of the current user with their last and next approved bookings and comments.
    """
    return item_service.list_owner_items(db, current_user.id, now, offset, size)


@router.get("/search", response_model=List[ItemResponse])
def search_items(
    text: str = "",
    offset: int = Query(0, alias="from", ge=0),
    size: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Search available items by name or description.
    An empty search text gives an empty list.
    """
    logger.debug(f"Searching items for: {text!r}")
    return item_service.search_items(db, text, offset, size)


@router.get("/{item_id}", response_model=ItemDetail)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve an item with its comments.
    The last and next approved bookings are shown to the owner only.
    """
    return item_service.get_item_detail(db, current_user.id, item_id, now)


@router.patch("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item_update: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an item's name, description or availability.
    Requires ownership.
    """
    return item_service.update_item(db, current_user.id, item_id, item_update)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete an item together with its bookings and comments.
    Only the owner may delete it.
    """
    item_service.delete_item(db, current_user.id, item_id)
    return None


@router.post("/{item_id}/comment", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    item_id: int,
    comment: CommentCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    current_user: User = Depends(get_current_user),
):
    """
    Comment on an item.
    Only users who completed an approved booking of the item may comment.
    """
    created = comment_service.create_comment(db, current_user.id, item_id, comment.text, now)
    return CommentResponse.from_comment(created)
