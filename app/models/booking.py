import enum
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship
from app.db import Base


class BookingStatus(str, enum.Enum):
    """WAITING is the only initial status; APPROVED and REJECTED are final."""

    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_booker_start", "booker_id", "start_time"),
        Index("ix_bookings_item_start", "item_id", "start_time"),
    )

    id = Column(Integer, primary_key=True, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    booker_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.WAITING)

    item = relationship("Item", back_populates="bookings")
    booker = relationship("User", back_populates="bookings")
