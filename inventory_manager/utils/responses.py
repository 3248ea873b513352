"""Helpers for consistent responses.

JSON endpoints use the `{"success", "data", "error"}` envelope; browser pages
get the rendered `error.html` template instead.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify, render_template, request


def ok(data: Any, status_code: int = 200) -> Response:
    """Success response."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> Response:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )


def wants_json() -> bool:
    """True when the client asked for JSON rather than an HTML page."""

    if request.path.startswith("/health"):
        return True
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def error_page(code: str, message: str, status_code: int, details: Any | None = None):
    """Render an error for the current request in the format it prefers."""

    if wants_json():
        return fail(code, message, status_code, details)
    return (
        render_template("error.html", title=message, code=code, message=message, status=status_code),
        status_code,
    )
