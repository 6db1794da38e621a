from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from app.models.booking import BookingStatus
from app.utils.validation_helpers import to_naive_local


class BookingCreate(BaseModel):
    item_id: int
    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def check_timezone(cls, value):
        return to_naive_local(value)


class BookerInfo(BaseModel):
    id: int

    model_config = ConfigDict(from_attributes=True)


class BookedItemInfo(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    booker: BookerInfo
    item: BookedItemInfo

    model_config = ConfigDict(from_attributes=True)


class BookingShort(BaseModel):
    """Booking as shown on an item card: who rents it and when."""

    id: int
    booker_id: int
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(from_attributes=True)
