from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.exceptions import AuthorizationFailure
from app.models.user import User
from app.schemas.user import UserResponse, UserUpdate
from app.services import user_service
from app.services.common import get_user as find_user
from app.utils.auth import get_current_user


router = APIRouter(
    prefix="/users",
    tags=["users"],
)


def _check_self(user_id: int, current_user: User) -> None:
    if user_id != current_user.id:
        raise AuthorizationFailure(
            f"User with id:{current_user.id} may not modify user with id:{user_id}.",
            details={"user_id": current_user.id, "target_id": user_id},
        )


@router.get("/", response_model=List[UserResponse])
def get_users(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """
    Retrieve a list of all users.
    """
    return user_service.list_users(db, skip, limit)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a specific user by ID.
    """
    return find_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update a user's name or email.
    Users may only update themselves.
    """
    _check_self(user_id, current_user)
    return user_service.update_user(db, user_id, user_update)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a user together with their items, bookings, comments and requests.
    Users may only delete themselves.
    """
    _check_self(user_id, current_user)
    user_service.delete_user(db, user_id)
    return None
