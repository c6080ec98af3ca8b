from roombooker.exceptions import ValidationError


# Columns that are NOT NULL in the bookings table.
REQUIRED_BOOKING_FIELDS = {"room_id": "roomId", "is_moderator": "isModerator"}


def validate_room_id(room_id):
    if not room_id:
        raise ValidationError("roomId cannot be null.", field="roomId")
    return room_id


def validate_date_range(start_date, end_date):
    if not (start_date and end_date):
        return
    if (start_date.tzinfo is None) != (end_date.tzinfo is None):
        raise ValidationError("startDate and endDate must both carry a timezone or neither.", field="endDate")
    if end_date < start_date:
        raise ValidationError("endDate must not be earlier than startDate.", field="endDate")


def validate_booking_changes(changes):
    """Reject updates that would empty a required booking column."""
    if "room_id" in changes:
        validate_room_id(changes["room_id"])
    for attribute, field in REQUIRED_BOOKING_FIELDS.items():
        if attribute in changes and changes[attribute] is None:
            raise ValidationError(f"{field} cannot be null.", field=field)
    return changes


def merged_date_range(changes, stored_start, stored_end):
    """Start and end a booking would have once ``changes`` are applied."""
    start_date = changes.get("start_date", stored_start)
    end_date = changes.get("end_date", stored_end)
    # Stored values come back naive; compare new ones the way they will be stored.
    if "start_date" not in changes and start_date and end_date and end_date.tzinfo is not None:
        end_date = end_date.replace(tzinfo=None)
    if "end_date" not in changes and start_date and end_date and start_date.tzinfo is not None:
        start_date = start_date.replace(tzinfo=None)
    return start_date, end_date
