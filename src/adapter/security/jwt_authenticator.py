"""JWT implementation of the Authenticator port."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7


class JWTAuthenticator:
    def __init__(self, secret_key: str, expiration: timedelta = timedelta(days=JWT_EXPIRATION_DAYS)):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self._expiration = expiration

    def issue_token(self, user_id: str) -> str:
        """Create a signed access token whose subject is the user id."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self._expiration,
        }
        return jwt.encode(payload, self._secret_key, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> str | None:
        """Return the user id carried by a valid token, else None."""
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None
        return payload.get("sub")
