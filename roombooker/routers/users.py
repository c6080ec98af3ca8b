from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from roombooker.db import get_db
from roombooker.schemas.booking import BookingResponse
from roombooker.schemas.common import ErrorResponse, MessageResponse
from roombooker.schemas.user import UserCreate, UserResponse, UserUpdate
from roombooker.services import user_service
from roombooker.utils.auth import get_current_user, require_admin


router = APIRouter(
    prefix="/api",
    tags=["users"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("/users", response_model=List[UserResponse], summary="List all users")
def get_users(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return user_service.get_users(db)


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    description="Create a user record so tokens can be issued for it. Requires the admin role.",
    responses={400: {"model": ErrorResponse}},
)
def create_user(user: UserCreate, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    return user_service.create_user(db, user)


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="Get a user by ID",
    responses={404: {"model": ErrorResponse}},
)
def get_user_by_id(user_id: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return user_service.get_user_by_id(db, user_id)


@router.get(
    "/users/{user_id}/bookings",
    response_model=List[BookingResponse],
    summary="List a user's bookings",
    responses={404: {"model": ErrorResponse}},
)
def get_user_bookings(user_id: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return user_service.get_user_bookings(db, user_id)


@router.get(
    "/user/bookings",
    response_model=List[BookingResponse],
    summary="List the bookings of the authenticated user",
    responses={404: {"model": ErrorResponse}},
)
def get_session_user_bookings(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return user_service.get_session_user_bookings(db, current_user)


@router.get(
    "/user",
    response_model=UserResponse,
    summary="Get the authenticated user's profile",
    responses={404: {"model": ErrorResponse}},
)
def get_user_info(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return user_service.get_user_info(db, current_user)


@router.put(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Update a user",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Update a user's profile.

    - **firstName**, **lastName**, **position**, **picture**, **email**: (Optional) New values.
    """
    user_service.update_user(db, user_id, user_update)
    return {"message": "User updated successfully."}


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
    description="Delete a user and detach it from its bookings. Requires the admin role.",
    responses={404: {"model": ErrorResponse}},
)
def delete_user(user_id: str, db: Session = Depends(get_db), current_user: dict = Depends(require_admin)):
    user_service.delete_user(db, user_id)
    return {"message": "User deleted successfully."}
