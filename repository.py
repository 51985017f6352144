"""
Persistence adapter over a single MongoDB collection.

The repository hides pymongo from the request handlers: every driver
failure comes out as ``errors.StoreError`` and documents come back as
plain dicts with an ``id`` key (see ``database.serialize_document``).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from database import serialize_document
from errors import DuplicateRecordError, StoreError

logger = logging.getLogger(__name__)


def _now() -> datetime:
    # BSON dates carry milliseconds; drop the rest so responses match later reads
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _object_id(record_id: str) -> ObjectId:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError) as exc:
        raise StoreError(f"Malformed identifier: {record_id!r}", exc) from exc


class Repository:
    """find-all / find-by-id / create / update-by-id / delete-by-id over one collection."""

    def __init__(self, collection: Collection):
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    def ensure_indexes(self, unique_fields: Iterable[str] = ()) -> None:
        try:
            for field in unique_fields:
                self.collection.create_index(field, unique=True)
        except PyMongoError as exc:
            raise StoreError(f"Failed to create indexes on {self.name}", exc) from exc

    def count(self) -> int:
        try:
            return self.collection.count_documents({})
        except PyMongoError as exc:
            raise StoreError(f"Failed to count {self.name}", exc) from exc

    def list_all(self) -> List[Dict[str, Any]]:
        """All documents, newest first."""
        try:
            docs = self.collection.find().sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            return [serialize_document(d) for d in docs]
        except PyMongoError as exc:
            raise StoreError(f"Failed to list {self.name}", exc) from exc

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(record_id)
        try:
            doc = self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise StoreError(f"Failed to fetch {self.name} {record_id}", exc) from exc
        return serialize_document(doc) if doc else None

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = _now()
        doc = dict(fields)
        doc["created_at"] = now
        doc["updated_at"] = now
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateRecordError(f"Duplicate key in {self.name}", exc) from exc
        except (BSONError, OverflowError) as exc:
            raise StoreError(f"Document not encodable for {self.name}", exc) from exc
        except PyMongoError as exc:
            raise StoreError(f"Failed to insert into {self.name}", exc) from exc
        doc["_id"] = result.inserted_id
        logger.debug("Inserted %s %s", self.name, result.inserted_id)
        return serialize_document(doc)

    def update_by_id(self, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply the supplied fields; ``None`` values never overwrite stored ones."""
        oid = _object_id(record_id)
        changes = {k: v for k, v in fields.items() if v is not None}
        changes["updated_at"] = _now()
        try:
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise DuplicateRecordError(f"Duplicate key in {self.name}", exc) from exc
        except (BSONError, OverflowError) as exc:
            raise StoreError(f"Document not encodable for {self.name}", exc) from exc
        except PyMongoError as exc:
            raise StoreError(f"Failed to update {self.name} {record_id}", exc) from exc
        return serialize_document(doc) if doc else None

    def delete_by_id(self, record_id: str) -> bool:
        oid = _object_id(record_id)
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            raise StoreError(f"Failed to delete {self.name} {record_id}", exc) from exc
        return result.deleted_count > 0
