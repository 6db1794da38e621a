import logging
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError
from app.models.item import Item
from app.models.user import User


logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"User not found: {user_id}")
        raise NotFoundError("User", user_id)
    return user


def get_item(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        logger.warning(f"Item not found: {item_id}")
        raise NotFoundError("Item", item_id)
    return item
