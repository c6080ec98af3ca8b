"""
Booking operations: create, update, delete and the two listing views.

Every write runs in one transaction together with its join-table changes, so
a booking row is never left updated when attaching its users fails.
"""

import logging
from typing import List

from sqlalchemy.orm import Session, selectinload

from roombooker.db import transaction
from roombooker.exceptions import NotFoundError
from roombooker.models.booking import Booking
from roombooker.models.user import User
from roombooker.repositories.booking_users import BookingUsers
from roombooker.schemas.booking import BookingCreate, BookingUpdate
from roombooker.utils.validation_helpers import (
    merged_date_range,
    validate_booking_changes,
    validate_date_range,
    validate_room_id,
)

logger = logging.getLogger(__name__)


def create_booking(db: Session, booking: BookingCreate) -> Booking:
    """
    Persist a new booking and attach ``booking.user_ids`` to it.

    Raises ValidationError when ``room_id`` is missing, before anything is
    written.
    """
    validate_room_id(booking.room_id)
    validate_date_range(booking.start_date, booking.end_date)

    with transaction(db, "An error occurred while creating the booking."):
        db_booking = Booking(
            start_date=booking.start_date,
            end_date=booking.end_date,
            purpose=booking.purpose,
            room_id=booking.room_id,
            is_moderator=booking.is_moderator,
        )
        db.add(db_booking)
        db.flush()
        if booking.user_ids:
            BookingUsers(db, db_booking.id).add(booking.user_ids)

    db.refresh(db_booking)
    logger.debug(f"Created booking: {db_booking.id}, room_id: {db_booking.room_id}, users: {booking.user_ids}")
    return db_booking


def update_booking(db: Session, booking_id: int, booking_update: BookingUpdate) -> None:
    """
    Apply the booking fields present in ``booking_update``.

    When the row was updated and ``user_ids`` is non-empty, the booking's users
    are replaced by exactly that list. A payload carrying no booking field
    matches nothing and is reported as not found.
    """
    changes = booking_update.model_dump(exclude_unset=True, exclude={"user_ids"})
    validate_booking_changes(changes)

    with transaction(db, "An error occurred while updating the booking."):
        num = 0
        if "start_date" in changes or "end_date" in changes:
            stored = db.get(Booking, booking_id)
            if stored:
                validate_date_range(*merged_date_range(changes, stored.start_date, stored.end_date))
        if changes:
            num = (
                db.query(Booking)
                .filter(Booking.id == booking_id)
                .update(changes, synchronize_session=False)
            )
        if num != 1:
            logger.error(f"Booking not updated: {booking_id}, fields: {sorted(changes)}")
            raise NotFoundError(
                "Unable to update the booking with the specified ID. "
                "Booking not found or empty data provided."
            )
        if booking_update.user_ids:
            BookingUsers(db, booking_id).replace(booking_update.user_ids)

    logger.debug(f"Updated booking: {booking_id}, fields: {sorted(changes)}")


def delete_booking(db: Session, booking_id: int) -> None:
    with transaction(db, "An error occurred while deleting the booking."):
        db_booking = db.get(Booking, booking_id)
        if not db_booking:
            logger.error(f"Booking not found: {booking_id}")
            raise NotFoundError("Unable to delete the booking with the specified ID. Booking not found.")
        # The ORM clears the booking_users rows for the deleted booking.
        db.delete(db_booking)
    logger.debug(f"Deleted booking: {booking_id}")


def get_all_bookings(db: Session) -> List[Booking]:
    with transaction(db, "An error occurred while retrieving the bookings.", commit=False):
        bookings = (
            db.query(Booking)
            .options(selectinload(Booking.users))
            .order_by(Booking.id)
            .all()
        )
    logger.debug(f"Retrieved {len(bookings)} bookings")
    return bookings


def get_booking_by_id(db: Session, booking_id: int) -> Booking:
    with transaction(db, "An error occurred while retrieving the booking.", commit=False):
        booking = (
            db.query(Booking)
            .options(selectinload(Booking.users))
            .filter(Booking.id == booking_id)
            .first()
        )
        if not booking:
            logger.error(f"Booking not found: {booking_id}")
            raise NotFoundError("Booking not found.")
    return booking


def get_users_by_booking(db: Session, booking_id: int) -> List[User]:
    """Users attached to a booking; an empty list when there are none."""
    with transaction(db, "An error occurred while retrieving the booking users.", commit=False):
        if not db.get(Booking, booking_id):
            logger.error(f"Booking not found: {booking_id}")
            raise NotFoundError("Booking not found.")
        users = BookingUsers(db, booking_id).list()
    return users
