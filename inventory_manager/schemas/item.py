"""Marshmallow schemas for the item form."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate

from inventory_manager.utils.object_ids import is_object_id

TEXT_FIELDS = ("name", "description")
LIST_FIELDS = ("category",)


def _messages(message: str) -> dict[str, str]:
    return {"required": message, "null": message, "invalid": message}


def _validate_category_id(value: str) -> None:
    if not is_object_id(value):
        raise ValidationError("Invalid category")


class ItemFormSchema(Schema):
    """Validate a create/update item submission (already normalized)."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(
        required=True,
        validate=validate.Length(min=3, error="Name must be at least 3 characters"),
        error_messages=_messages("Name is required"),
    )
    description = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Description is required."),
        error_messages=_messages("Description is required."),
    )
    price = fields.Float(
        required=True,
        allow_nan=False,
        validate=validate.Range(min=0, error="Price is required"),
        error_messages={**_messages("Price is required"), "special": "Price is required"},
    )
    in_stock = fields.Integer(
        required=True,
        validate=validate.Range(min=0, error="Number in stock is required"),
        error_messages=_messages("Number in stock is required"),
    )
    category = fields.List(fields.String(validate=_validate_category_id), load_default=list)
