"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.errors import StorageError
from domain.model.site import Site
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.fail_add_site = False
        self.fail_reads = False

    # ── write operations ─────────────────────────────────────

    def create(self, username: str, email: str, password_hash: str, subdomain: str) -> User | None:
        if any(
            u.username == username or u.email == email or u.subdomain == subdomain
            for u in self.store.values()
        ):
            return None

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            username=username,
            email=email,
            subdomain=subdomain,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return user

    def add_site(self, user_id: str, site: Site) -> bool:
        user = self.store.get(user_id)
        if not user or self.fail_add_site:
            return False
        if user.has_site_slug(site.slug):
            return False

        user.sites.append(site)
        user.updated_at = datetime.now(timezone.utc)
        return True

    # ── read operations ──────────────────────────────────────

    def _check_readable(self) -> None:
        if self.fail_reads:
            raise StorageError("User store unavailable")

    def get_by_id(self, user_id: str) -> User | None:
        self._check_readable()
        return self.store.get(user_id)

    def get_by_username(self, username: str) -> User | None:
        self._check_readable()
        for user in self.store.values():
            if user.username == username:
                return user
        return None

    def get_by_email(self, email: str) -> User | None:
        self._check_readable()
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def subdomain_exists(self, subdomain: str) -> bool:
        self._check_readable()
        return any(u.subdomain == subdomain for u in self.store.values())

    def ping(self) -> bool:
        return not self.fail_reads
