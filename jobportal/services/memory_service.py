"""
In-process stores with the same semantics as the MongoDB ones.

Used with STORAGE_BACKEND=memory and by the test suite. Each store guards
its data with a lock, so insert-if-absent and compare-and-clear stay
atomic under FastAPI's threadpool.
"""

import copy
import itertools
import threading
from datetime import datetime
from typing import Optional, List, Dict, Any
from bson import ObjectId

from jobportal.core.errors import DuplicateIdentity
from jobportal.services.stores import ClientStore, DeliveryLogStore, PostingStore

UNIQUE_CLIENT_FIELDS = ("company_email", "phone_no")


class InMemoryClientStore(ClientStore):

    def __init__(self):
        self._docs: Dict[str, dict] = {}
        self._lock = threading.Lock()

    def insert_if_absent(self, doc: Dict[str, Any]) -> str:
        with self._lock:
            for existing in self._docs.values():
                for field in UNIQUE_CLIENT_FIELDS:
                    if doc.get(field) is not None and existing.get(field) == doc.get(field):
                        raise DuplicateIdentity()
            client_id = str(ObjectId())
            stored = copy.deepcopy(doc)
            stored["_id"] = client_id
            self._docs[client_id] = stored
            return client_id

    def get(self, client_id: str) -> Optional[dict]:
        with self._lock:
            doc = self._docs.get(client_id)
            return copy.deepcopy(doc) if doc else None

    def find_by_contact(self, company_email: str = None, phone_no: str = None) -> Optional[dict]:
        with self._lock:
            for doc in self._docs.values():
                if company_email and doc.get("company_email") == company_email:
                    return copy.deepcopy(doc)
                if phone_no and doc.get("phone_no") == phone_no:
                    return copy.deepcopy(doc)
        return None

    def set_fields(self, client_id: str, fields: Dict[str, Any]) -> bool:
        with self._lock:
            doc = self._docs.get(client_id)
            if doc is None:
                return False
            doc.update(copy.deepcopy(fields))
            return True

    def consume_codes(self, client_id: str, codes: Dict[str, str], updates: Dict[str, Any] = None) -> bool:
        with self._lock:
            doc = self._docs.get(client_id)
            if doc is None or not codes:
                return False
            for field, value in codes.items():
                if field not in doc or doc[field] != value:
                    return False
            for field in codes:
                del doc[field]
            doc.update(copy.deepcopy(updates or {}))
            return True

    def delete(self, client_id: str) -> bool:
        with self._lock:
            return self._docs.pop(client_id, None) is not None

    def ping(self) -> bool:
        return True


class InMemoryDeliveryLogStore(DeliveryLogStore):

    def __init__(self):
        self._entries: List[dict] = []
        self._lock = threading.Lock()

    def append(self, entry: Dict[str, Any]) -> str:
        with self._lock:
            stored = copy.deepcopy(entry)
            stored["_id"] = str(ObjectId())
            self._entries.append(stored)
            return stored["_id"]

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
        with self._lock:
            matches = []
            # Iterating newest-first keeps insertion order as the tie-breaker
            for entry in reversed(self._entries):
                if client_id and entry.get("clientId") != client_id:
                    continue
                if start and end and not (start <= entry["sentAt"] <= end):
                    continue
                if status and entry.get("status") != status:
                    continue
                if category and entry.get("type") != category:
                    continue
                if channel and entry.get("channel") != channel:
                    continue
                matches.append(entry)
            matches.sort(key=lambda e: e["sentAt"], reverse=True)
            return copy.deepcopy(matches[:limit])


class InMemoryPostingStore(PostingStore):

    def __init__(self):
        self._docs: List[tuple] = []
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def insert(self, doc: Dict[str, Any]) -> dict:
        with self._lock:
            stored = copy.deepcopy(doc)
            stored["_id"] = str(ObjectId())
            self._docs.append((next(self._seq), stored))
            return copy.deepcopy(stored)

    def list(self, client_id: Optional[str] = None) -> List[dict]:
        with self._lock:
            rows = [
                (seq, doc) for seq, doc in self._docs
                if not client_id or doc.get("clientId") == client_id
            ]
            rows.sort(key=lambda row: (row[1]["createdAt"], row[0]), reverse=True)
            return [copy.deepcopy(doc) for _, doc in rows]
