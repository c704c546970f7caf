"""
Storage interfaces.

The services never talk to pymongo directly; they get one of these
injected. mongo_service.py implements them on MongoDB, memory_service.py
keeps everything in process (local runs and tests).

Documents cross this boundary as plain dicts with "_id" as a string.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional


class ClientStore(ABC):
    """Registered companies."""

    @abstractmethod
    def insert_if_absent(self, doc: Dict[str, Any]) -> str:
        """
        Insert a client unless one already holds the same company_email
        or phone_no. Returns the new id, raises DuplicateIdentity otherwise.
        """

    @abstractmethod
    def get(self, client_id: str) -> Optional[dict]:
        """Fetch a client by id (None for unknown or malformed ids)."""

    @abstractmethod
    def find_by_contact(self, company_email: str = None, phone_no: str = None) -> Optional[dict]:
        """Fetch the client matching either identifier."""

    @abstractmethod
    def set_fields(self, client_id: str, fields: Dict[str, Any]) -> bool:
        """Overwrite fields on a client. Returns False if it doesn't exist."""

    @abstractmethod
    def consume_codes(self, client_id: str, codes: Dict[str, str], updates: Dict[str, Any] = None) -> bool:
        """
        Compare-and-clear in one step.

        If every field in `codes` currently equals the given value, remove
        those fields and apply `updates`; return True. Otherwise leave the
        record untouched and return False.
        """

    @abstractmethod
    def delete(self, client_id: str) -> bool:
        """Remove a client (registration rollback)."""

    @abstractmethod
    def ping(self) -> bool:
        """True when the backing store is reachable."""


class DeliveryLogStore(ABC):
    """Append-only audit log of outbound deliveries."""

    @abstractmethod
    def append(self, entry: Dict[str, Any]) -> str:
        """Store one entry, return its id."""

    @abstractmethod
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
        """Entries matching every given filter, newest first."""


class PostingStore(ABC):
    """Job postings."""

    @abstractmethod
    def insert(self, doc: Dict[str, Any]) -> dict:
        """Store a posting, return it with its "_id"."""

    @abstractmethod
    def list(self, client_id: Optional[str] = None) -> List[dict]:
        """Postings (optionally of one client), newest first."""
