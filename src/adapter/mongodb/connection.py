import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'ntandostore')
USERS_COLLECTION_NAME = 'users'

_client: MongoClient | None = None
_unavailable = False


def reset_client():
    global _client, _unavailable
    _client = None
    _unavailable = False


def get_mongodb_client() -> MongoClient | None:
    """Return the process-wide MongoDB client, connecting on first use.

    The driver reconnects on its own once a client exists. A missing
    MONGO_URL or a failed first ping is remembered, and None is returned
    until reset_client() is called.
    """
    global _client, _unavailable

    if _client is not None:
        return _client
    if _unavailable:
        return None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured")
        _unavailable = True
        return None

    try:
        client = MongoClient(
            MONGO_URL,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
    except PyMongoError as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        _unavailable = True
        return None

    _client = client
    logger.info("[MONGODB] Connected", extra={"database": DATABASE_NAME})
    return client
