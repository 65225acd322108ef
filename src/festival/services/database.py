import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from festival.errors import StorageError

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None
_collection: Optional[Collection] = None


def init_mongoDB(uri: str, db_name: str, collection_name: str, timeout_ms: int = 5000) -> Collection:
    """
    Initialize the MongoDB connection and return the registrations collection.

    The connection is verified before returning so the app never serves
    requests against a store it cannot reach.

    Args:
        uri (str): MongoDB connection string.
        db_name (str): Database name.
        collection_name (str): Collection holding registration documents.
        timeout_ms (int): Server selection timeout in milliseconds.

    Returns:
        Collection: the registrations collection.

    Raises:
        StorageError: If the server cannot be reached.
    """
    global _client, _collection

    client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
    try:
        client.server_info()
        collection = client[db_name][collection_name]
        collection.create_index([("email", ASCENDING)], unique=True)
    except PyMongoError as exc:
        client.close()
        logger.error(f"❌ MongoDB connection failed: {exc}")
        raise StorageError(f"Could not connect to MongoDB: {exc}", 500) from exc

    _client = client
    _collection = collection
    logger.info(f"✅ MongoDB connected ({db_name}.{collection_name})")
    return collection


def get_collection() -> Collection:
    """Return the registrations collection initialized by ``init_mongoDB``."""
    if _collection is None:
        raise StorageError("Database not connected")
    return _collection


def close_mongoDB() -> None:
    """Close the MongoDB client. Safe to call more than once."""
    global _client, _collection
    if _client is not None:
        _client.close()
        logger.info("MongoDB connection closed")
    _client = None
    _collection = None
