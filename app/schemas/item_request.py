from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from app.schemas.item import ItemResponse


class ItemRequestCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=2000)


class ItemRequestResponse(BaseModel):
    id: int
    description: str
    requester_id: int
    created: datetime
    items: List[ItemResponse] = []

    model_config = ConfigDict(from_attributes=True)
