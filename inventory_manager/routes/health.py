"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from inventory_manager.db import get_mongo_db
from inventory_manager.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint; store failures surface through the error handlers."""

    get_mongo_db().command("ping")
    return ok({"status": "ok"})
