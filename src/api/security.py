"""Bearer-token authentication dependencies."""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_authenticator, get_user_repo
from domain.model.errors import StorageError
from domain.model.user import User
from port.authenticator import Authenticator
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    authenticator: Authenticator = Depends(get_authenticator),
    user_repo: UserRepository = Depends(get_user_repo),
) -> User:
    """Resolve the bearer token to a User.

    Raises 401 if not authenticated, 503 if the user store is unreadable.
    """
    if not credentials:
        raise _unauthorized("Access token required")

    user_id = authenticator.verify(credentials.credentials)
    if not user_id:
        raise _unauthorized("Invalid or expired token")

    try:
        user = user_repo.get_by_id(user_id)
    except StorageError as e:
        logger.error("User lookup failed during authentication", extra={"userId": user_id, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if not user:
        raise _unauthorized("User not found")

    return user
