import os
from functools import lru_cache
from pathlib import Path

from fastapi import HTTPException

from adapter.json_file.user_repository import JsonFileUserRepository
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME, MONGO_URL
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.security.jwt_authenticator import JWTAuthenticator
from adapter.storage.local_blob_store import LocalBlobStore
from adapter.storage.r2_blob_store import R2BlobStore
from domain.model.domains import SupportedDomainSet
from port.authenticator import Authenticator
from port.blob_store import BlobStore
from port.user_repository import UserRepository
from services.site_publisher import SitePublisher
from utils.domain_config import get_domain_set
from utils.keyed_lock import KeyedLock

USER_STORE = os.getenv('USER_STORE', 'mongodb' if MONGO_URL else 'json')
USERS_FILE = os.getenv('USERS_FILE', 'data/users.json')
BLOB_STORE = os.getenv('BLOB_STORE', 'local')
SITES_DIR = os.getenv('SITES_DIR', 'data/sites')
JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')

# One lock table per process; every SitePublisher shares it.
_publish_locks = KeyedLock()


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


@lru_cache(maxsize=1)
def _json_user_repo() -> JsonFileUserRepository:
    return JsonFileUserRepository(Path(USERS_FILE))


def get_user_repo() -> UserRepository:
    if USER_STORE == 'json':
        return _json_user_repo()
    return MongoUserRepository(_get_db())


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    if BLOB_STORE == 'r2':
        return R2BlobStore()
    return LocalBlobStore(Path(SITES_DIR))


@lru_cache(maxsize=1)
def get_authenticator() -> Authenticator:
    if not JWT_SECRET_KEY:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return JWTAuthenticator(JWT_SECRET_KEY)


def get_domains() -> SupportedDomainSet:
    return get_domain_set()


def get_site_publisher() -> SitePublisher:
    return SitePublisher(
        users=get_user_repo(),
        blobs=get_blob_store(),
        domains=get_domain_set(),
        locks=_publish_locks,
    )


def check_user_store() -> bool:
    try:
        return get_user_repo().ping()
    except HTTPException:
        return False
