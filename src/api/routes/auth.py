"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_authenticator, get_user_repo
from api.models import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from api.security import get_current_user_required
from domain.model.errors import (
    DomainError,
    DuplicateError,
    StorageError,
    SubdomainSpaceExhaustedError,
    ValidationError,
)
from domain.model.user import User
from port.authenticator import Authenticator
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    authenticator: Authenticator = Depends(get_authenticator),
):
    """Register a new user and assign their subdomain.

    Raises:
        HTTPException: 400 on invalid input, 409 if username or email is taken,
            503 if no subdomain could be assigned or the user store is unreadable,
            500 if the user could not be stored
    """
    try:
        user = auth_service.register(repo, request.username, request.email, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SubdomainSpaceExhaustedError as e:
        logger.error("Subdomain assignment exhausted", extra={"username": request.username})
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except StorageError as e:
        logger.error("Registration failed", extra={"username": request.username, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return AuthResponse(token=authenticator.issue_token(user.id), user=UserResponse.from_domain(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    authenticator: Authenticator = Depends(get_authenticator),
):
    """Login user and return a bearer token.

    Raises:
        HTTPException: 401 if credentials are invalid, 503 if the user store is unreadable
    """
    try:
        user = auth_service.authenticate(repo, request.username, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    logger.info("User logged in", extra={"userId": user.id})
    return AuthResponse(token=authenticator.issue_token(user.id), user=UserResponse.from_domain(user))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return UserResponse.from_domain(current_user)
