from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from app.schemas.booking import BookingShort
from app.schemas.comment import CommentResponse


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=512)
    available: bool


class ItemCreate(ItemBase):
    request_id: Optional[int] = None


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=512)
    available: Optional[bool] = None


class ItemResponse(ItemBase):
    id: int
    request_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ItemDetail(ItemResponse):
    """Item with its comments and, for the owner only, the last and next approved booking."""

    last_booking: Optional[BookingShort] = None
    next_booking: Optional[BookingShort] = None
    comments: List[CommentResponse] = []
