from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from roombooker.db import Base
from roombooker.models.associations import booking_users


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    purpose = Column(String, nullable=True)
    room_id = Column(String, nullable=False, index=True)
    is_moderator = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    users = relationship(
        "User", secondary=booking_users, back_populates="bookings", order_by="User.id"
    )
