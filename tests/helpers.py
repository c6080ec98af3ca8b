from datetime import datetime, timedelta
from sqlalchemy import select
from roombooker.models.associations import booking_users

START_DATE = datetime.now().replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
END_DATE = START_DATE + timedelta(hours=1)


def booked_user_ids(db, booking_id):
    """User ids stored in the join table for a booking."""
    rows = db.execute(
        select(booking_users.c.user_id).where(booking_users.c.booking_id == booking_id)
    )
    return {row.user_id for row in rows}
