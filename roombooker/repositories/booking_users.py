"""
Join-table access for the users attached to one booking.

``add`` is a union with the current set, ``replace`` makes the stored set
equal to the given ids, ``list`` returns the associated ``User`` rows. None of
the methods commit; the caller owns the transaction. Writes go straight to
the table, so the session is expired afterwards to drop relationship
collections loaded before the change.
"""

import logging
from typing import Iterable, List, Set

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from roombooker.exceptions import ValidationError
from roombooker.models.associations import booking_users
from roombooker.models.user import User

logger = logging.getLogger(__name__)


class BookingUsers:
    def __init__(self, db: Session, booking_id: int):
        self.db = db
        self.booking_id = booking_id

    def current_ids(self) -> Set[str]:
        rows = self.db.execute(
            select(booking_users.c.user_id).where(booking_users.c.booking_id == self.booking_id)
        )
        return {row.user_id for row in rows}

    def add(self, user_ids: Iterable[str]) -> None:
        wanted = self._existing_users(user_ids)
        self._insert(wanted - self.current_ids())
        self.db.expire_all()

    def replace(self, user_ids: Iterable[str]) -> None:
        wanted = self._existing_users(user_ids)
        current = self.current_ids()

        stale = current - wanted
        if stale:
            self.db.execute(
                delete(booking_users).where(
                    booking_users.c.booking_id == self.booking_id,
                    booking_users.c.user_id.in_(sorted(stale)),
                )
            )
        self._insert(wanted - current)
        self.db.expire_all()
        logger.debug(
            f"Booking {self.booking_id}: removed users {sorted(stale)}, now {sorted(wanted)}"
        )

    def list(self) -> List[User]:
        return list(
            self.db.scalars(
                select(User)
                .join(booking_users, booking_users.c.user_id == User.id)
                .where(booking_users.c.booking_id == self.booking_id)
                .order_by(User.id)
            )
        )

    def _insert(self, user_ids: Set[str]) -> None:
        if not user_ids:
            return
        self.db.execute(
            insert(booking_users),
            [{"booking_id": self.booking_id, "user_id": user_id} for user_id in sorted(user_ids)],
        )

    def _existing_users(self, user_ids: Iterable[str]) -> Set[str]:
        wanted = set(user_ids)
        if not wanted:
            return wanted
        found = set(self.db.scalars(select(User.id).where(User.id.in_(sorted(wanted)))))
        missing = wanted - found
        if missing:
            logger.error(f"Unknown user ids for booking {self.booking_id}: {sorted(missing)}")
            raise ValidationError(
                f"Users not found: {', '.join(sorted(missing))}.",
                field="userIds",
                context={"booking_id": self.booking_id},
            )
        return wanted
