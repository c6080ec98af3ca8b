from datetime import datetime
from typing import Optional
from roombooker.schemas.common import CamelModel


class UserBase(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None
    picture: Optional[str] = None
    email: Optional[str] = None


class UserCreate(UserBase):
    id: Optional[str] = None


class UserUpdate(UserBase):
    pass


class UserSummary(CamelModel):
    """User fields embedded in booking listings."""

    id: str
    position: Optional[str] = None
    picture: Optional[str] = None
    email: Optional[str] = None


class UserDetail(UserSummary):
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserResponse(UserDetail):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
