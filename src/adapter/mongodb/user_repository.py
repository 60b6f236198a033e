"""MongoDB implementation of UserRepository.

Each user is one document; the user's sites live in an embedded ``sites``
array in creation order.
"""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from adapter.mongodb.indexes import create_index_safe
from domain.model.errors import StorageError
from domain.model.site import Site
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        try:
            return all([
                create_index_safe(self.collection, [(field, 1)], f'idx_users_{field}', unique=True)
                for field in ('username', 'email', 'subdomain')
            ])
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    @staticmethod
    def _site_to_doc(site: Site) -> dict:
        return {
            'id': site.id,
            'name': site.name,
            'slug': site.slug,
            'domain': site.domain,
            'urls': site.urls,
            'created_at': site.created_at,
            'updated_at': site.updated_at,
            'visits': site.visits,
            'published': site.published,
        }

    @staticmethod
    def _site_to_domain(doc: dict) -> Site:
        return Site(
            id=doc['id'],
            name=doc['name'],
            slug=doc['slug'],
            domain=doc['domain'],
            urls=doc.get('urls', {}),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            visits=doc.get('visits', 0),
            published=doc.get('published', True),
        )

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            subdomain=doc['subdomain'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
            sites=[self._site_to_domain(s) for s in doc.get('sites', [])],
        )

    def create(self, username: str, email: str, password_hash: str, subdomain: str) -> User | None:
        """Create a new user and return the User object."""
        try:
            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)
            user_doc = {
                '_id': user_id,
                'username': username,
                'email': email,
                'password_hash': password_hash,
                'subdomain': subdomain,
                'created_at': now,
                'updated_at': now,
                'sites': [],
            }
            self.collection.insert_one(user_doc)

            user = self._to_domain(user_doc)
            logger.info("User created", extra={"userId": user_id, "username": username})
            return user
        except PyMongoError as e:
            error_str = str(e)
            if 'duplicate key' in error_str.lower() or 'E11000' in error_str:
                logger.warning("User creation failed: duplicate key", extra={"username": username})
            else:
                logger.error("Failed to create user", extra={"username": username, "error": error_str})
            return None

    def add_site(self, user_id: str, site: Site) -> bool:
        """Append a site unless the user already has one with the same slug."""
        try:
            result = self.collection.update_one(
                {'_id': user_id, 'sites.slug': {'$ne': site.slug}},
                {
                    '$push': {'sites': self._site_to_doc(site)},
                    '$set': {'updated_at': datetime.now(timezone.utc)},
                },
            )
            if result.modified_count > 0:
                return True
            logger.warning("Site not added: user missing or slug taken",
                           extra={"userId": user_id, "slug": site.slug})
            return False
        except PyMongoError as e:
            logger.error("Failed to add site", extra={"userId": user_id, "slug": site.slug, "error": str(e)})
            return False

    def _find_one(self, query: dict, log_extra: dict) -> User | None:
        try:
            doc = self.collection.find_one(query)
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user", extra={**log_extra, "error": str(e)})
            raise StorageError("User lookup failed") from e

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        return self._find_one({'_id': user_id}, {"userId": user_id})

    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        return self._find_one({'username': username}, {"username": username})

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        return self._find_one({'email': email}, {"email": email})

    def subdomain_exists(self, subdomain: str) -> bool:
        try:
            return self.collection.count_documents({'subdomain': subdomain}, limit=1) > 0
        except PyMongoError as e:
            logger.error("Failed to check subdomain", extra={"subdomain": subdomain, "error": str(e)})
            raise StorageError("Subdomain lookup failed") from e

    def ping(self) -> bool:
        try:
            self.collection.database.client.admin.command('ping')
            return True
        except PyMongoError:
            return False
