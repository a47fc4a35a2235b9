"""Process-wide MongoDB client.

The client is created lazily and cached. A missing MONGO_URL disables the
store for the life of the process; a failed connection is retried on the
next call.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'tasktrack')
USERS_COLLECTION_NAME = 'users'
TASKS_COLLECTION_NAME = 'tasks'

_client_cache: MongoClient | None = None
_not_configured = False
_outage_logged = False


def reset_client():
    global _client_cache, _not_configured, _outage_logged
    _client_cache = None
    _not_configured = False
    _outage_logged = False


def _connect() -> MongoClient:
    client = MongoClient(
        MONGO_URL,
        tz_aware=True,  # UTC-aware datetimes, matching the domain models
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=30000,
        maxPoolSize=10,
        minPoolSize=0,
        maxIdleTimeMS=30000,
        waitQueueTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
    )
    client.admin.command('ping')
    return client


def get_mongodb_client() -> MongoClient | None:
    """Return a healthy cached client, connecting if needed.

    Returns:
        MongoDB client, or None if MONGO_URL is unset or the server is unreachable
    """
    global _client_cache, _not_configured, _outage_logged

    if _client_cache:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.debug("Cached MongoDB client failed ping, reconnecting")

    if _not_configured:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL not configured, MongoDB store disabled")
        _not_configured = True
        return None

    try:
        client = _connect()
    except PyMongoError as e:
        # Reported once per outage; every later call tries again
        if not _outage_logged:
            logger.error("MongoDB connection failed", extra={"error": str(e)[:200]})
            _outage_logged = True
        return None

    if _outage_logged:
        logger.info("MongoDB connection restored", extra={"database": DATABASE_NAME})
    else:
        logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
    _outage_logged = False
    _client_cache = client
    return client
