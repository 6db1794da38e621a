import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.exceptions import EmailAlreadyExists
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.services.common import get_user
from app.utils.auth import get_password_hash
from app.utils.validation_helpers import blank_to_none


logger = logging.getLogger(__name__)


def _check_email_free(db: Session, email: str, user_id: Optional[int] = None) -> None:
    query = db.query(User).filter(User.email == email)
    if user_id is not None:
        query = query.filter(User.id != user_id)
    if query.first():
        logger.warning(f"Email already in use: {email}")
        raise EmailAlreadyExists(email)


def create_user(db: Session, data: UserCreate) -> User:
    _check_email_free(db, data.email)
    user = User(name=data.name, email=data.email, hashed_password=get_password_hash(data.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def list_users(db: Session, offset: int = 0, limit: int = 100) -> List[User]:
    return db.query(User).order_by(User.id).offset(offset).limit(limit).all()


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    user = get_user(db, user_id)
    update_data = {key: blank_to_none(value) for key, value in data.model_dump(exclude_unset=True).items()}

    if update_data.get("email") and update_data["email"] != user.email:
        _check_email_free(db, update_data["email"], user_id)

    for key, value in update_data.items():
        if value is not None:
            setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")
