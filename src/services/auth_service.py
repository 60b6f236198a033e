"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

import bcrypt
from tenacity import retry, retry_if_exception_type, stop_after_attempt

from domain.model.errors import (
    DomainError,
    DuplicateError,
    InvalidUsernameError,
    SubdomainSpaceExhaustedError,
    ValidationError,
)
from domain.model.subdomain import SubdomainGenerator, is_valid_username
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
PASSWORD_MIN_LENGTH = 6
MAX_SUBDOMAIN_ATTEMPTS = 10


class _SubdomainTaken(Exception):
    pass


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _validate_registration(username: str, email: str, password: str) -> None:
    if not username or not email or not password:
        raise ValidationError("All fields are required")
    if not is_valid_username(username):
        raise InvalidUsernameError(
            "Invalid username. Use 3-30 characters, letters, numbers, hyphens, and underscores only."
        )
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")


@retry(
    retry=retry_if_exception_type(_SubdomainTaken),
    stop=stop_after_attempt(MAX_SUBDOMAIN_ATTEMPTS),
    reraise=True,
)
def _draw_unused_subdomain(repo: UserRepository, generator: SubdomainGenerator, username: str) -> str:
    candidate = generator.generate(username)
    if repo.subdomain_exists(candidate):
        logger.info("Subdomain collision, drawing again", extra={"subdomain": candidate})
        raise _SubdomainTaken(candidate)
    return candidate


def assign_subdomain(repo: UserRepository, username: str, generator: SubdomainGenerator | None = None) -> str:
    """Generate a subdomain identity no existing user owns.

    Raises:
        SubdomainSpaceExhaustedError: every attempt collided
    """
    try:
        return _draw_unused_subdomain(repo, generator or SubdomainGenerator(), username)
    except _SubdomainTaken:
        raise SubdomainSpaceExhaustedError(
            f"No unused subdomain for '{username}' after {MAX_SUBDOMAIN_ATTEMPTS} attempts"
        ) from None


def register(
    repo: UserRepository,
    username: str,
    email: str,
    password: str,
    generator: SubdomainGenerator | None = None,
) -> User:
    """Register a new user.

    Returns the created User domain object.

    Raises:
        ValidationError: missing field or weak password
        InvalidUsernameError: username breaks the username rules
        DuplicateError: username or email already registered
        SubdomainSpaceExhaustedError: no unused subdomain could be drawn
        StorageError: the user store could not be read
    """
    _validate_registration(username, email, password)

    if repo.get_by_username(username):
        raise DuplicateError("Username already taken")
    if repo.get_by_email(email):
        raise DuplicateError("Email already registered")

    subdomain = assign_subdomain(repo, username, generator)
    password_hash = _hash_password(password)

    user = repo.create(username=username, email=email, password_hash=password_hash, subdomain=subdomain)
    if not user:
        raise DomainError("Failed to create user")

    logger.info("User registered", extra={"userId": user.id, "subdomain": user.subdomain})
    return user


def authenticate(repo: UserRepository, username: str, password: str) -> User:
    """Authenticate a user by username and password.

    Raises:
        ValidationError: invalid credentials (deliberately vague)
        StorageError: the user store could not be read
    """
    if not username or not password:
        raise ValidationError("Username and password are required")

    user = repo.get_by_username(username)
    if not user or not _verify_password(password, user.password_hash):
        raise ValidationError("Invalid credentials")
    return user
