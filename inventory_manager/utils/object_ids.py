"""Conversions between path/form ids and BSON ObjectIds."""

from __future__ import annotations

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: object) -> ObjectId | None:
    """Return the ObjectId for `value`, or None when it is not a valid id."""

    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def is_object_id(value: object) -> bool:
    """True when `value` is a well-formed ObjectId (or already one)."""

    return ObjectId.is_valid(value) if isinstance(value, (str, bytes, ObjectId)) else False
