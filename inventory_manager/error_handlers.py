"""Centralized error handlers."""

from __future__ import annotations

import logging

from flask import Flask
from pymongo.errors import DuplicateKeyError, PyMongoError
from werkzeug.exceptions import HTTPException

from inventory_manager.errors import AppError, ConflictError, DatabaseError
from inventory_manager.utils.responses import error_page

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        return error_page(exc.code, exc.message, exc.status_code, exc.details)

    @app.errorhandler(DuplicateKeyError)
    def _handle_duplicate_key(exc: DuplicateKeyError):
        logger.info("Duplicate key", exc_info=exc)
        key_value = (exc.details or {}).get("keyValue")
        wrapped = ConflictError(details=str(key_value) if key_value else None)
        return error_page(wrapped.code, wrapped.message, wrapped.status_code, wrapped.details)

    @app.errorhandler(PyMongoError)
    def _handle_store_error(exc: PyMongoError):
        logger.error("Store error", exc_info=exc)
        wrapped = DatabaseError()
        return error_page(wrapped.code, wrapped.message, wrapped.status_code)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        # Examples: 404 Not Found for /favicon.ico, 413 for oversized uploads.
        status = int(getattr(exc, "code", 500) or 500)
        if status == 404:
            return error_page("not_found", "Not found", 404)

        return error_page(
            "http_error",
            getattr(exc, "description", "HTTP error"),
            status,
            details={"name": getattr(exc, "name", "HTTPException")},
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled exception")
        return error_page("internal_error", "Internal server error", 500)
