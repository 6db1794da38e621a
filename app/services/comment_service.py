import logging
from datetime import datetime
from typing import Dict, Iterable, List
from sqlalchemy.orm import Session
from app.exceptions import ValidationFailure
from app.models.comment import Comment
from app.repositories import bookings as booking_repository
from app.services.common import get_item, get_user


logger = logging.getLogger(__name__)


def can_comment(db: Session, author_id: int, item_id: int, now: datetime) -> bool:
    """True if the author has an APPROVED booking of the item that ended by ``now``."""
    return booking_repository.exists_completed(db, item_id, author_id, now)


def create_comment(db: Session, author_id: int, item_id: int, text: str, now: datetime) -> Comment:
    """
    Attach a comment to an item on behalf of someone who has rented it.

    Blank text is refused before anything is looked up; author and item must
    both exist before eligibility is checked.
    """
    text = (text or "").strip()
    if not text:
        raise ValidationFailure("Comment text can't be blank.", details={"item_id": item_id})

    author = get_user(db, author_id)
    item = get_item(db, item_id)

    if not can_comment(db, author.id, item.id, now):
        logger.warning(f"User {author_id} has no completed booking of item {item_id}")
        raise ValidationFailure(
            f"User with id:{author_id} has no completed booking of item with id:{item_id}.",
            details={"user_id": author_id, "item_id": item_id},
        )

    comment = Comment(text=text, item_id=item.id, author_id=author.id, created=now)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info(f"Created comment {comment.id} on item {item_id} by user {author_id}")
    return comment


def comments_for_item(db: Session, item_id: int) -> List[Comment]:
    return (
        db.query(Comment)
        .filter(Comment.item_id == item_id)
        .order_by(Comment.created.desc(), Comment.id.desc())
        .all()
    )


def comments_for_items(db: Session, item_ids: Iterable[int]) -> Dict[int, List[Comment]]:
    item_ids = list(item_ids)
    grouped = {item_id: [] for item_id in item_ids}
    if not item_ids:
        return grouped
    comments = (
        db.query(Comment)
        .filter(Comment.item_id.in_(item_ids))
        .order_by(Comment.created.desc(), Comment.id.desc())
        .all()
    )
    for comment in comments:
        grouped[comment.item_id].append(comment)
    return grouped
