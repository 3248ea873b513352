"""Normalization of submitted forms and flattening of validation errors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from marshmallow import Schema
from markupsafe import escape


@dataclass(frozen=True)
class FormError:
    """One user-correctable problem with a submitted form field."""

    field: str
    message: str


def form_to_dict(form: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a werkzeug MultiDict; keys submitted more than once become lists."""

    if hasattr(form, "lists"):
        return {key: values[0] if len(values) == 1 else list(values) for key, values in form.lists()}
    return dict(form)


def normalize_category(value: Any) -> list[Any]:
    """Always return the submitted category value as a list.

    absent -> [], a single value -> [value], a list -> unchanged.
    """

    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def trim_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def sanitize_text(value: Any) -> str:
    """Trim surrounding whitespace and HTML-escape the result."""

    return str(escape(trim_text(value)))


def normalize_submission(
    form: Mapping[str, Any],
    *,
    text_fields: Iterable[str] = (),
    list_fields: Iterable[str] = (),
) -> dict[str, Any]:
    """Turn a raw submission into the plain mapping the schemas validate.

    Text fields are only trimmed here; lengths are checked on what the user
    typed, and `escape_fields` runs once validation is done.
    """

    data = form_to_dict(form)
    for name in text_fields:
        data[name] = trim_text(data.get(name))
    for name in list_fields:
        data[name] = normalize_category(data.get(name))
    return data


def escape_fields(values: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Copy of `values` with the given text fields HTML-escaped."""

    escaped = dict(values)
    for name in fields:
        if name in escaped:
            escaped[name] = str(escape(escaped[name] or ""))
    return escaped


def collect_errors(schema: Schema, messages: Mapping[str, Any]) -> list[FormError]:
    """Flatten marshmallow error messages, in the order the schema declares its fields."""

    ordered = [name for name in schema.fields if name in messages]
    ordered += [name for name in messages if name not in schema.fields]

    errors: list[FormError] = []
    for name in ordered:
        for message in _iter_messages(messages[name]):
            errors.append(FormError(field=name, message=message))
    return errors


def _iter_messages(value: Any) -> Iterable[str]:
    # List fields report {index: [messages]}.
    if isinstance(value, Mapping):
        for nested in value.values():
            yield from _iter_messages(nested)
    elif isinstance(value, (list, tuple)):
        for nested in value:
            yield from _iter_messages(nested)
    else:
        yield str(value)
