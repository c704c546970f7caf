"""
MongoDB Connection Utility

MongoDB stores:
- Client records (registration data, verification flag, pending OTPs)
- Delivery log (every outbound email / SMS attempt)
- Job postings with their invited candidates
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from jobportal.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri, tz_aware=True)
    return _client


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - clients: Registered companies
    - email_logs: Delivery audit log
    - postings: Job postings
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "clients": "clients",
    "email_logs": "email_logs",
    "postings": "postings",
}


def init_mongo_indexes(db=None):
    """
    Create indexes. Call this once during app startup.

    The unique indexes on clients are what make registration an atomic
    insert-if-absent: a second insert with the same email or phone fails
    with DuplicateKeyError instead of racing a separate lookup.
    """
    if db is None:
        db = get_mongo_db()

    db[COLLECTIONS["clients"]].create_index("company_email", unique=True)
    db[COLLECTIONS["clients"]].create_index("phone_no", unique=True)

    db[COLLECTIONS["email_logs"]].create_index([
        ("clientId", ASCENDING),
        ("sentAt", DESCENDING)
    ])

    db[COLLECTIONS["postings"]].create_index([
        ("clientId", ASCENDING),
        ("createdAt", DESCENDING)
    ])

    logger.info("MongoDB indexes created successfully")
