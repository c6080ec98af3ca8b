import uuid
from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import relationship
from roombooker.db import Base
from roombooker.models.associations import booking_users


def _new_user_id():
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, index=True, default=_new_user_id)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    position = Column(String, nullable=True)
    picture = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    bookings = relationship(
        "Booking", secondary=booking_users, back_populates="users", order_by="Booking.id"
    )
