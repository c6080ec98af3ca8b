import pytest

from roombooker.exceptions import ValidationError
from roombooker.models.booking import Booking
from roombooker.repositories.booking_users import BookingUsers
from tests.helpers import booked_user_ids


# pylint: disable=redefined-outer-name,unused-argument


@pytest.fixture
def empty_booking(test_db, test_users):
    booking = Booking(room_id="room-2", purpose="Focus time")
    test_db.add(booking)
    test_db.commit()
    test_db.refresh(booking)
    return booking


def test_add_is_a_union(test_db, empty_booking):
    repo = BookingUsers(test_db, empty_booking.id)
    repo.add(["u1"])
    repo.add(["u1", "u2", "u2"])
    test_db.commit()
    assert booked_user_ids(test_db, empty_booking.id) == {"u1", "u2"}


def test_replace_syncs_to_the_given_set(test_db, test_booking):
    repo = BookingUsers(test_db, test_booking.id)
    repo.replace(["u2", "u3"])
    test_db.commit()
    assert booked_user_ids(test_db, test_booking.id) == {"u2", "u3"}


def test_replace_refreshes_loaded_relationship(test_db, test_booking):
    assert [user.id for user in test_booking.users] == ["u1", "u2"]
    BookingUsers(test_db, test_booking.id).replace(["u3"])
    test_db.commit()
    assert [user.id for user in test_booking.users] == ["u3"]


def test_list_returns_users_ordered_by_id(test_db, empty_booking):
    repo = BookingUsers(test_db, empty_booking.id)
    assert repo.list() == []
    repo.add(["u3", "u1"])
    assert [user.id for user in repo.list()] == ["u1", "u3"]


def test_unknown_user_is_rejected_before_writing(test_db, test_booking):
    repo = BookingUsers(test_db, test_booking.id)
    with pytest.raises(ValidationError) as excinfo:
        repo.replace(["u3", "ghost"])
    assert excinfo.value.field == "userIds"
    assert "ghost" in excinfo.value.message
    assert booked_user_ids(test_db, test_booking.id) == {"u1", "u2"}
