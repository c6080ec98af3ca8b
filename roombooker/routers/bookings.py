from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from roombooker.db import get_db
from roombooker.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingDetailResponse,
    BookingUpdate,
    BookingWithUsers,
)
from roombooker.schemas.common import ErrorResponse, MessageResponse
from roombooker.schemas.user import UserResponse
from roombooker.services import booking_service
from roombooker.utils.auth import get_current_user


router = APIRouter(
    prefix="/api/bookings",
    tags=["bookings"],
    dependencies=[Depends(get_current_user)],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post(
    "",
    response_model=BookingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    responses={400: {"model": ErrorResponse}},
)
def create_booking(booking: BookingCreate, db: Session = Depends(get_db)):
    """
    Create a booking and attach users to it.

    - **roomId**: ID of the booked room (required).
    - **startDate** / **endDate**: Time range of the booking.
    - **purpose**: Purpose of the booking.
    - **isModerator**: Defaults to false.
    - **userIds**: Users to attach to the booking.
    """
    db_booking = booking_service.create_booking(db, booking)
    return {"message": "Booking created successfully.", "booking": db_booking}


@router.get(
    "",
    response_model=List[BookingWithUsers],
    summary="List all bookings",
    description="Every booking with the id, position, picture and email of its users.",
)
def get_all_bookings(db: Session = Depends(get_db)):
    return booking_service.get_all_bookings(db)


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Get a booking by ID",
    responses={404: {"model": ErrorResponse}},
)
def get_booking_by_id(booking_id: int, db: Session = Depends(get_db)):
    return {"booking": booking_service.get_booking_by_id(db, booking_id)}


@router.put(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Update a booking",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_booking(booking_id: int, booking_update: BookingUpdate, db: Session = Depends(get_db)):
    """
    Update a booking's fields.

    When **userIds** is a non-empty list, the booking's users are replaced by
    exactly those users.
    """
    booking_service.update_booking(db, booking_id, booking_update)
    return {"message": "Booking updated successfully."}


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete a booking",
    responses={404: {"model": ErrorResponse}},
)
def delete_booking(booking_id: int, db: Session = Depends(get_db)):
    booking_service.delete_booking(db, booking_id)
    return {"message": "Booking deleted successfully."}


@router.get(
    "/{booking_id}/users",
    response_model=List[UserResponse],
    summary="List the users of a booking",
    responses={404: {"model": ErrorResponse}},
)
def get_users_by_booking(booking_id: int, db: Session = Depends(get_db)):
    return booking_service.get_users_by_booking(db, booking_id)
