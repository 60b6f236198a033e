"""JSON file implementation of UserRepository.

Keeps every user in a single ``users.json`` mapping of user id to user
document. Each operation loads the whole mapping, mutates it and saves it
back while holding one process-wide lock. Saves go to a temporary file in
the same directory and are swapped in with ``os.replace``, so readers never
see a half-written file.
"""

import json
import logging
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

from domain.model.errors import StorageError
from domain.model.site import Site
from domain.model.user import User

logger = logging.getLogger(__name__)


def _site_to_doc(site: Site) -> dict:
    return {
        'id': site.id,
        'name': site.name,
        'slug': site.slug,
        'domain': site.domain,
        'urls': site.urls,
        'createdAt': site.created_at.isoformat(),
        'updatedAt': site.updated_at.isoformat(),
        'visits': site.visits,
        'published': site.published,
    }


def _site_to_domain(doc: dict) -> Site:
    return Site(
        id=doc['id'],
        name=doc['name'],
        slug=doc['slug'],
        domain=doc['domain'],
        urls=doc.get('urls', {}),
        created_at=datetime.fromisoformat(doc['createdAt']),
        updated_at=datetime.fromisoformat(doc['updatedAt']),
        visits=doc.get('visits', 0),
        published=doc.get('published', True),
    )


def _to_domain(doc: dict) -> User:
    return User(
        id=doc['id'],
        username=doc['username'],
        email=doc['email'],
        subdomain=doc['subdomain'],
        created_at=datetime.fromisoformat(doc['createdAt']),
        updated_at=datetime.fromisoformat(doc.get('updatedAt', doc['createdAt'])),
        password_hash=doc.get('password'),
        sites=[_site_to_domain(s) for s in doc.get('sites', [])],
    )


class JsonFileUserRepository:
    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.RLock()

    # ── file access ──────────────────────────────────────────

    def _load(self) -> dict[str, dict]:
        try:
            with open(self.path, encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return {}

    def _save(self, users: dict[str, dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix='.users-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(users, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _find(self, predicate) -> User | None:
        with self._lock:
            try:
                users = self._load()
            except (OSError, ValueError) as e:
                logger.error("Failed to read users file", extra={"path": str(self.path), "error": str(e)})
                raise StorageError(f"Cannot read users file: {self.path}") from e
        for doc in users.values():
            if predicate(doc):
                return _to_domain(doc)
        return None

    # ── write operations ─────────────────────────────────────

    def create(self, username: str, email: str, password_hash: str, subdomain: str) -> User | None:
        with self._lock:
            try:
                users = self._load()
                if any(
                    u['username'] == username or u['email'] == email or u['subdomain'] == subdomain
                    for u in users.values()
                ):
                    logger.warning("User creation failed: duplicate key", extra={"username": username})
                    return None

                user_id = str(uuid.uuid4())
                now = datetime.now(timezone.utc).isoformat()
                users[user_id] = {
                    'id': user_id,
                    'username': username,
                    'email': email,
                    'password': password_hash,
                    'createdAt': now,
                    'updatedAt': now,
                    'subdomain': subdomain,
                    'sites': [],
                }
                self._save(users)
            except (OSError, ValueError) as e:
                logger.error("Failed to create user", extra={"username": username, "error": str(e)})
                return None

        logger.info("User created", extra={"userId": user_id, "username": username})
        return _to_domain(users[user_id])

    def add_site(self, user_id: str, site: Site) -> bool:
        with self._lock:
            try:
                users = self._load()
                user = users.get(user_id)
                if user is None:
                    return False
                if any(s['slug'] == site.slug for s in user.get('sites', [])):
                    logger.warning("Site not added: slug taken", extra={"userId": user_id, "slug": site.slug})
                    return False

                user.setdefault('sites', []).append(_site_to_doc(site))
                user['updatedAt'] = datetime.now(timezone.utc).isoformat()
                self._save(users)
                return True
            except (OSError, ValueError) as e:
                logger.error("Failed to add site", extra={"userId": user_id, "slug": site.slug, "error": str(e)})
                return False

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User | None:
        return self._find(lambda doc: doc['id'] == user_id)

    def get_by_username(self, username: str) -> User | None:
        return self._find(lambda doc: doc['username'] == username)

    def get_by_email(self, email: str) -> User | None:
        return self._find(lambda doc: doc['email'] == email)

    def subdomain_exists(self, subdomain: str) -> bool:
        return self._find(lambda doc: doc['subdomain'] == subdomain) is not None

    def ping(self) -> bool:
        with self._lock:
            try:
                self._load()
                return True
            except (OSError, ValueError):
                return False
