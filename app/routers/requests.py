from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.models.user import User
from app.schemas.item_request import ItemRequestCreate, ItemRequestResponse
from app.services import request_service
from app.utils.auth import get_current_user
from app.utils.clock import get_now


router = APIRouter(
    prefix="/requests",
    tags=["requests"],
)


@router.post("/", response_model=ItemRequestResponse, status_code=status.HTTP_201_CREATED)
def create_request(
    request: ItemRequestCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    current_user: User = Depends(get_current_user),
):
    """
    Publish a request for an item nobody has listed yet.
    """
    return request_service.create_request(db, current_user.id, request.description, now)


@router.get("/", response_model=List[ItemRequestResponse])
def get_own_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Requests of the current user, newest first, with the items listed in answer.
    """
    return request_service.list_own_requests(db, current_user.id)


@router.get("/all", response_model=List[ItemRequestResponse])
def get_other_requests(
    offset: int = Query(0, alias="from", ge=0),
    size: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Requests of other users, newest first.
    """
    return request_service.list_other_requests(db, current_user.id, offset, size)


@router.get("/{request_id}", response_model=ItemRequestResponse)
def get_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return request_service.get_request(db, current_user.id, request_id)
