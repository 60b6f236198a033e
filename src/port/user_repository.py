from typing import Protocol

from domain.model.site import Site
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user and site metadata access.

    Lookups raise StorageError when the store cannot be read, so a failed
    read is never mistaken for a missing user.
    """
    def create(self, username: str, email: str, password_hash: str, subdomain: str) -> User | None:
        """Create a new user. Return User or None if creation failed."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def subdomain_exists(self, subdomain: str) -> bool:
        """Return True if any user already owns this subdomain identity."""
        ...

    def add_site(self, user_id: str, site: Site) -> bool:
        """Append a site to the user's collection.

        Return False if the user is missing, the slug is already taken by
        another of the user's sites, or the write failed.
        """
        ...

    def ping(self) -> bool:
        """Return True if the backing store is reachable."""
        ...
