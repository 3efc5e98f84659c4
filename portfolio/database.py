"""
MongoDB storage layer.

One client is opened at process start and shared by every request; pymongo
pools connections and reconnects on its own, so a failed startup ping does
not have to be fatal.
"""

from typing import Any, Dict, List, Optional

from bson.objectid import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from portfolio.config import DEFAULT_DB_NAME, DB_TIMEOUT_MS
from portfolio.errors import DatabaseConnectionError, StorageUnavailable
from portfolio.utils import setup_logger

logger = setup_logger(__name__)

MESSAGES_COLLECTION = "messages"


def _render_value(value: Any) -> Any:
    """ObjectIds anywhere in a document become strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: _render_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_render_value(v) for v in value]
    return value


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Render a stored document as JSON-friendly output (`_id` -> `id`)."""
    out = {k: _render_value(v) for k, v in doc.items() if k != "_id"}
    if "_id" in doc:
        out = {"id": str(doc["_id"]), **out}
    return out


class PortfolioStore:
    """Read/write access to the portfolio collections."""

    def __init__(self, client: MongoClient, database_name: Optional[str] = None):
        self.client = client
        if database_name:
            self.db = client.get_database(database_name)
        else:
            self.db = client.get_default_database(default=DEFAULT_DB_NAME)

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"[DB] Ping failed: {e}")
            return False

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        """All documents of a collection, by `order` then insertion order."""
        try:
            cursor = self.db[collection].find().sort(
                [("order", ASCENDING), ("_id", ASCENDING)]
            )
            return [serialize_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error(f"[DB] Listing {collection} failed: {e}")
            raise StorageUnavailable() from e

    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            doc = self.db[collection].find_one(query)
        except PyMongoError as e:
            logger.error(f"[DB] Lookup in {collection} failed: {e}")
            raise StorageUnavailable() from e
        return serialize_document(doc) if doc else None

    def insert_message(self, document: Dict[str, Any]) -> str:
        """Store a contact message and return its id."""
        try:
            result = self.db[MESSAGES_COLLECTION].insert_one(dict(document))
        except PyMongoError as e:
            logger.error(f"[DB] Storing message failed: {e}")
            raise StorageUnavailable() from e
        return str(result.inserted_id)


def connect_store(
    uri: Optional[str],
    required: bool = False,
    timeout_ms: int = DB_TIMEOUT_MS,
) -> Optional[PortfolioStore]:
    """
    Open the process-wide database connection.

    Args:
        uri: MongoDB connection string; the database name is taken from it
        required: raise DatabaseConnectionError instead of degrading
        timeout_ms: server selection timeout for the startup ping

    Returns:
        A PortfolioStore (possibly not yet reachable), or None when no usable
        connection string is configured.
    """
    if not uri:
        if required:
            raise DatabaseConnectionError("MONGODB_URI is not set")
        logger.warning("[DB] MONGODB_URI not set; storage routes will answer 503")
        return None

    try:
        client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    except PyMongoError as e:
        # malformed URI; the driver cannot retry this one
        if required:
            raise DatabaseConnectionError(f"Invalid MongoDB URI: {e}") from e
        logger.error(f"[DB] Invalid connection string: {e}")
        return None

    store = PortfolioStore(client)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        if required:
            raise DatabaseConnectionError(f"Could not connect to MongoDB: {e}") from e
        logger.error(f"[DB] Connection failed: {e}. Continuing without a working database.")
        return store

    logger.info("[DB] Connected to MongoDB")
    return store
