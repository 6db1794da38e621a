from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.db import Base


class ItemRequest(Base):
    __tablename__ = "requests"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(2000), nullable=False)
    requester_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created = Column(DateTime, nullable=False)

    requester = relationship("User", back_populates="requests")
    items = relationship("Item", back_populates="request", order_by="Item.id")
