from sqlalchemy import Column, ForeignKey, Integer, String, Table
from roombooker.db import Base


# Many-to-many link between users and bookings; a row is just the id pair.
booking_users = Table(
    "booking_users",
    Base.metadata,
    Column("booking_id", Integer, ForeignKey("bookings.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(64), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)
