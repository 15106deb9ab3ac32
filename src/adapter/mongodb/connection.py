"""MongoDB client factory shared by the repositories."""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level chatter is only interesting when something breaks
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'todo')
TASKS_COLLECTION_NAME = 'tasks'
USERS_COLLECTION_NAME = 'users'

_client_cache: MongoClient | None = None
_connection_failed = False


def reset_client():
    global _client_cache, _connection_failed
    _client_cache = None
    _connection_failed = False


def get_mongodb_client() -> MongoClient | None:
    """Return a healthy cached client, connecting on first use.

    A missing MONGO_URL or a failed first connection is treated as a
    configuration problem and is not retried. A cached client that stops
    answering pings is dropped and a reconnect is attempted.
    """
    global _client_cache, _connection_failed

    if _client_cache is not None:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.warning("[MONGODB] Cached client failed ping, reconnecting")

    if _connection_failed:
        return None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured")
        _connection_failed = True
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
            tz_aware=True,
        )
        client.admin.command('ping')
    except PyMongoError as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        _connection_failed = True
        return None

    logger.info(f"[MONGODB] Connected to {DATABASE_NAME}")
    _client_cache = client
    return client
