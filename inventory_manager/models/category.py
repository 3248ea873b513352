"""Category record stored in the `categories` collection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass
class Category:
    """A classification an item may belong to."""

    kind: ClassVar[str] = "category"

    name: str
    description: str = ""
    id: str | None = None
    # Only meaningful while rendering the item form.
    checked: bool = False

    @property
    def url(self) -> str:
        return f"/inventory/category/{self.id}"

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> Category:
        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            name=str(doc.get("name") or ""),
            description=str(doc.get("description") or ""),
        )

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description}


def mark_checked(categories: Iterable[Category], selected_ids: Iterable[str]) -> list[Category]:
    """Flag the categories whose id appears in `selected_ids`."""

    selected = {str(i) for i in selected_ids}
    out: list[Category] = []
    for category in categories:
        category.checked = category.id in selected
        out.append(category)
    return out
