"""
MongoDB Service - store implementations for the document collections.

Collections in this database:
1. clients     - Registered companies and their pending OTPs
2. email_logs  - One entry per outbound email / SMS attempt
3. postings    - Job postings with invited candidates
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from jobportal.core.errors import DuplicateIdentity
from jobportal.db.mongodb import get_collection, COLLECTIONS
from jobportal.services.stores import ClientStore, DeliveryLogStore, PostingStore


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse an id coming from a request; None if it isn't an ObjectId."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# ============================================================
# CLIENTS COLLECTION
# ============================================================

class MongoClientStore(ClientStore):
    """
    Handles client records.
    Uniqueness relies on the unique indexes from init_mongo_indexes().
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["clients"])

    def insert_if_absent(self, doc: Dict[str, Any]) -> str:
        try:
            result = self.collection.insert_one(dict(doc))
        except DuplicateKeyError as exc:
            raise DuplicateIdentity() from exc
        return str(result.inserted_id)

    def get(self, client_id: str) -> Optional[dict]:
        oid = to_object_id(client_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def find_by_contact(self, company_email: str = None, phone_no: str = None) -> Optional[dict]:
        clauses = []
        if company_email:
            clauses.append({"company_email": company_email})
        if phone_no:
            clauses.append({"phone_no": phone_no})
        if not clauses:
            return None
        return serialize_doc(self.collection.find_one({"$or": clauses}))

    def set_fields(self, client_id: str, fields: Dict[str, Any]) -> bool:
        oid = to_object_id(client_id)
        if oid is None:
            return False
        result = self.collection.update_one({"_id": oid}, {"$set": fields})
        return result.matched_count > 0

    def consume_codes(self, client_id: str, codes: Dict[str, str], updates: Dict[str, Any] = None) -> bool:
        oid = to_object_id(client_id)
        if oid is None or not codes:
            return False

        update = {"$unset": {field: "" for field in codes}}
        if updates:
            update["$set"] = updates

        # Single conditional write: match and clear happen together
        doc = self.collection.find_one_and_update(
            {"_id": oid, **codes},
            update,
            return_document=ReturnDocument.AFTER
        )
        return doc is not None

    def delete(self, client_id: str) -> bool:
        oid = to_object_id(client_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count > 0

    def ping(self) -> bool:
        try:
            self.collection.database.client.admin.command('ping')
            return True
        except Exception:
            return False


# ============================================================
# EMAIL LOGS COLLECTION
# Append-only: entries are never updated after insert
# ============================================================

class MongoDeliveryLogStore(DeliveryLogStore):
    """
    Handles the delivery audit log.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["email_logs"])

    def append(self, entry: Dict[str, Any]) -> str:
        result = self.collection.insert_one(dict(entry))
        return str(result.inserted_id)

    def query(
        self,
        client_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        channel: Optional[str] = None,
        limit: int = 100,
    ) -> List[dict]:
        query: Dict[str, Any] = {}
        if client_id:
            query["clientId"] = client_id
        # Date range only applies when both ends are given
        if start and end:
            query["sentAt"] = {"$gte": start, "$lte": end}
        if status:
            query["status"] = status
        if category:
            query["type"] = category
        if channel:
            query["channel"] = channel

        cursor = self.collection.find(query).sort([("sentAt", -1), ("_id", -1)]).limit(limit)
        return serialize_docs(list(cursor))


# ============================================================
# POSTINGS COLLECTION
# ============================================================

class MongoPostingStore(PostingStore):
    """
    Handles job postings.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["postings"])

    def insert(self, doc: Dict[str, Any]) -> dict:
        posting = dict(doc)
        result = self.collection.insert_one(posting)
        posting["_id"] = str(result.inserted_id)
        return posting

    def list(self, client_id: Optional[str] = None) -> List[dict]:
        query = {"clientId": client_id} if client_id else {}
        cursor = self.collection.find(query).sort([("createdAt", -1), ("_id", -1)])
        return serialize_docs(list(cursor))
