from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.db import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String(2000), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created = Column(DateTime, nullable=False)

    item = relationship("Item", back_populates="comments")
    author = relationship("User", back_populates="comments")
