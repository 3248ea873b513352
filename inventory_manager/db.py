"""MongoDB client management.

One `MongoClient` per application (it is thread-safe and pools connections);
request handlers look the database handle up through `get_mongo_db()`.
"""

from __future__ import annotations

import atexit
import logging

from flask import Flask, current_app
from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)


def create_mongo_client(uri: str, *, timeout_ms: int = 5000) -> MongoClient:
    # Connecting is lazy: nothing talks to the server until the first operation.
    return MongoClient(
        uri,
        serverSelectionTimeoutMS=timeout_ms,
        tz_aware=True,
        connect=False,
    )


def init_db(app: Flask) -> None:
    """Create the Mongo client and register the database handle on the app."""

    client = create_mongo_client(
        str(app.config["MONGODB_URI"]),
        timeout_ms=int(app.config.get("MONGODB_TIMEOUT_MS", 5000)),
    )
    db = client[str(app.config["MONGODB_DB"])]

    app.extensions["mongo_client"] = client
    app.extensions["mongo_db"] = db

    atexit.register(client.close)
    logger.debug("Mongo client configured for database %s", db.name)


def get_mongo_db() -> Database:
    """Get the database handle of the current application."""

    db: Database | None = current_app.extensions.get("mongo_db")
    if db is None:
        raise RuntimeError("Mongo database not initialized")
    return db
