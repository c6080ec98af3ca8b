"""
Error kinds raised by the services and rendered at the HTTP boundary.

    RoomBookerError (base)   -> 500
    ├── ValidationError      -> 400
    ├── UnauthorizedError    -> 401
    ├── ForbiddenError       -> 403
    ├── NotFoundError        -> 404
    └── InternalError        -> 500

The handler registered in ``roombooker.main`` turns any of these into a
``{"message": ..., "statusCode": ...}`` JSON body. ``context`` is logged but
never returned to the client.
"""

from typing import Any, Dict, Optional

from fastapi import status


class RoomBookerError(Exception):
    """Base exception for all application errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RoomBookerError):
    """The client sent data that breaks a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Validation failed.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(RoomBookerError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized!", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class ForbiddenError(RoomBookerError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden.", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(RoomBookerError):
    """
    A requested row does not exist, or an update/delete matched zero rows.

    SQLAlchemy returns None (or a zero row count) for missing records; the
    services convert that into this exception.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Resource not found.", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InternalError(RoomBookerError):
    """Wraps a persistence fault; the original error is only logged."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
