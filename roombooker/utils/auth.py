import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional
from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from roombooker.config import settings
from roombooker.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

# Missing credentials are reported by get_current_user, not by the scheme.
bearer_scheme = HTTPBearer(
    scheme_name="JWT",
    description="Enter 'Bearer <your_jwt_token>'. The legacy x-access-token header is accepted as well.",
    auto_error=False,
)


def create_access_token(user_id: str, roles: Iterable[str] = (), expires_delta: Optional[timedelta] = None):
    """Create a JWT access token for a user with an expiration time."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "roles": list(roles), "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict:
    """Verify a token and return the session it describes."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        raise UnauthorizedError(context={"reason": str(e)})

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError(context={"reason": "token has no subject"})
    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return {"id": user_id, "roles": list(roles)}


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    x_access_token: Optional[str] = Header(default=None),
):
    """Verify the JWT from the Bearer header (or x-access-token) and return the session."""
    token = credentials.credentials if credentials else x_access_token
    if not token:
        raise ForbiddenError("No token provided!")
    return decode_access_token(token)


def require_admin(current_user: dict = Depends(get_current_user)):
    if ADMIN_ROLE not in current_user["roles"]:
        logger.error(f"User {current_user['id']} is not an admin")
        raise ForbiddenError("Require Admin Role!")
    return current_user
