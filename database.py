"""
MongoDB connection management.

A service holds exactly one ``MongoClient`` for the life of the process.
``connect`` establishes it (failing fast when the store is missing or
unreachable) and every later call hands back the same database handle.
"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import settings
from errors import ConfigurationError

logger = logging.getLogger(__name__)

SERVER_SELECTION_TIMEOUT_MS = 5000

client: Optional[MongoClient] = None
db: Optional[Database] = None


def connect(url: Optional[str] = None, name: Optional[str] = None) -> Database:
    """Open the process-wide connection and return the database handle.

    Raises ``ConfigurationError`` when no connection string is configured.
    Exits the process with status 1 when the server cannot be reached
    within ``SERVER_SELECTION_TIMEOUT_MS``.
    """
    global client, db
    if db is not None:
        return db

    url = url or settings.database_url
    if not url:
        raise ConfigurationError("DATABASE_URL is not set in environment")

    try:
        mongo = MongoClient(url, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS, tz_aware=True)
        mongo.admin.command("ping")
    except PyMongoError:
        logger.exception("MongoDB connection error")
        sys.exit(1)

    client = mongo
    db = mongo.get_default_database(default=name or settings.database_name)
    logger.info("MongoDB connected (database %s)", db.name)
    return db


def get_database() -> Database:
    if db is None:
        raise ConfigurationError("Database not connected")
    return db


def close() -> None:
    global client, db
    if client is not None:
        client.close()
    client = None
    db = None


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a stored document JSON friendly: ``_id`` becomes ``id``."""
    out: Dict[str, Any] = {}
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            out[k] = str(v)
        elif isinstance(v, datetime):
            out[k] = v.isoformat()
        else:
            out[k] = v
    if "_id" in out:
        out["id"] = out.pop("_id")
    return out
