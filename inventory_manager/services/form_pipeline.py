"""Shared validate -> branch -> re-render-or-persist routine for form submissions."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from marshmallow import Schema, ValidationError

from inventory_manager.models.category import Category
from inventory_manager.schemas.forms import FormError, collect_errors, escape_fields, normalize_submission

T = TypeVar("T")


@dataclass
class FormOutcome(Generic[T]):
    """Result of processing one submission.

    When `errors` is empty the entity was persisted; otherwise it is the
    unsaved candidate to re-render, together with the form's choices.
    """

    entity: T
    errors: list[FormError] = field(default_factory=list)
    choices: list[Category] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def process_submission(
    form: Mapping[str, Any],
    *,
    schema: Schema,
    build: Callable[[dict[str, Any]], T],
    persist: Callable[[T], T],
    load_choices: Callable[[T], list[Category]] | None = None,
    text_fields: Iterable[str] = (),
    list_fields: Iterable[str] = (),
    extra_errors: Iterable[FormError] = (),
) -> FormOutcome[T]:
    """Validate `form`, then either persist the built entity or return it with errors.

    `build` turns the loaded (or, on failure, the trimmed as-submitted)
    values, with text fields escaped, into an entity; `persist` stores it and
    returns the stored entity; `load_choices` reloads whatever the form needs
    to be re-rendered.
    Nothing is persisted when any error was found.
    """

    text_fields = tuple(text_fields)
    data = normalize_submission(form, text_fields=text_fields, list_fields=list_fields)

    errors: list[FormError] = []
    try:
        values = schema.load(data)
    except ValidationError as exc:
        values = {**data, **(exc.valid_data or {})}
        errors = collect_errors(schema, exc.normalized_messages())
    errors.extend(extra_errors)

    entity = build(escape_fields(values, text_fields))
    if errors:
        choices = load_choices(entity) if load_choices is not None else []
        return FormOutcome(entity=entity, errors=errors, choices=choices)

    return FormOutcome(entity=persist(entity))
