"""Marshmallow schemas for the category form."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

TEXT_FIELDS = ("name", "description")


class CategoryFormSchema(Schema):
    """Validate a category submission (already normalized)."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(
        required=True,
        validate=validate.Length(min=3, error="Name must be at least 3 characters"),
        error_messages={"required": "Name is required", "null": "Name is required"},
    )
    description = fields.String(load_default="")
