from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator
from roombooker.schemas.common import CamelModel
from roombooker.schemas.user import UserDetail, UserSummary


def _room_id_as_string(value):
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class BookingCreate(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    purpose: Optional[str] = None
    # Checked by booking_service.create_booking; a missing roomId is a 400.
    room_id: Optional[str] = None
    is_moderator: bool = False
    user_ids: List[str] = Field(default_factory=list)

    @field_validator("room_id", mode="before")
    @classmethod
    def coerce_room_id(cls, value):
        return _room_id_as_string(value)


class BookingUpdate(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    purpose: Optional[str] = None
    room_id: Optional[str] = None
    is_moderator: Optional[bool] = None
    user_ids: Optional[List[str]] = None

    @field_validator("room_id", mode="before")
    @classmethod
    def coerce_room_id(cls, value):
        return _room_id_as_string(value)


class BookingResponse(CamelModel):
    id: int
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    purpose: Optional[str] = None
    room_id: str
    is_moderator: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingWithUsers(BookingResponse):
    users: List[UserSummary] = Field(default_factory=list)


class BookingDetail(BookingResponse):
    users: List[UserDetail] = Field(default_factory=list)


class BookingCreatedResponse(CamelModel):
    message: str
    booking: BookingResponse


class BookingDetailResponse(CamelModel):
    booking: BookingDetail
