import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from roombooker.db import transaction
from roombooker.exceptions import NotFoundError, ValidationError
from roombooker.models.booking import Booking
from roombooker.models.user import User
from roombooker.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        logger.error(f"User not found: {user_id}")
        raise NotFoundError("User not found.")
    return user


def _ensure_email_free(db: Session, email: Optional[str], user_id: Optional[str] = None):
    if not email:
        return
    query = db.query(User).filter(User.email == email)
    if user_id is not None:
        query = query.filter(User.id != user_id)
    if query.first():
        raise ValidationError("Email is already in use.", field="email")


def get_users(db: Session) -> List[User]:
    with transaction(db, "An error occurred while retrieving the users.", commit=False):
        users = db.query(User).order_by(User.id).all()
    logger.debug(f"Retrieved {len(users)} users")
    return users


def get_user_by_id(db: Session, user_id: str) -> User:
    with transaction(db, "An error occurred while retrieving the user.", commit=False):
        return _get_user(db, user_id)


def get_user_bookings(db: Session, user_id: str) -> List[Booking]:
    """Bookings the user is attached to."""
    with transaction(db, "An error occurred while retrieving the user's bookings.", commit=False):
        return list(_get_user(db, user_id).bookings)


def get_session_user_bookings(db: Session, current_user: dict) -> List[Booking]:
    return get_user_bookings(db, current_user["id"])


def get_user_info(db: Session, current_user: dict) -> User:
    """Profile of the user the request's token was issued for."""
    return get_user_by_id(db, current_user["id"])


def create_user(db: Session, user: UserCreate) -> User:
    with transaction(db, "An error occurred while creating the user."):
        if user.id and db.get(User, user.id):
            raise ValidationError("A user with this id already exists.", field="id")
        _ensure_email_free(db, user.email)
        db_user = User(**user.model_dump(exclude_none=True))
        db.add(db_user)
    db.refresh(db_user)
    logger.debug(f"Created user: {db_user.id}")
    return db_user


def update_user(db: Session, user_id: str, user_update: UserUpdate) -> None:
    """
    Apply the profile fields present in ``user_update``.

    Zero matched rows (unknown id, or nothing to change) is reported as not
    found.
    """
    changes = user_update.model_dump(exclude_unset=True)
    with transaction(db, "An error occurred while updating the user."):
        _ensure_email_free(db, changes.get("email"), user_id)
        num = 0
        if changes:
            num = db.query(User).filter(User.id == user_id).update(changes, synchronize_session=False)
        if num != 1:
            logger.error(f"User not updated: {user_id}, fields: {sorted(changes)}")
            raise NotFoundError(
                "Unable to update the user with the specified ID. "
                "User not found or empty data provided."
            )
    logger.debug(f"Updated user: {user_id}, fields: {sorted(changes)}")


def delete_user(db: Session, user_id: str) -> None:
    with transaction(db, "An error occurred while deleting the user."):
        db_user = db.get(User, user_id)
        if not db_user:
            logger.error(f"User not found: {user_id}")
            raise NotFoundError("Unable to delete the user with the specified ID. User not found.")
        db.delete(db_user)
    logger.debug(f"Deleted user: {user_id}")
