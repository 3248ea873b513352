"""Item record stored in the `items` collection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from bson import ObjectId

from inventory_manager.models.category import Category


@dataclass
class Item:
    """A sellable inventory record.

    `category` holds category ids (str) as submitted, or resolved `Category`
    records when the item was read with its categories joined. `price` and
    `in_stock` keep the submitted text when a form fails validation so the
    form can be re-rendered as entered.
    """

    kind: ClassVar[str] = "item"

    name: str
    description: str
    price: float | str | None
    in_stock: int | str | None
    category: list[str | Category] = field(default_factory=list)
    image: str | None = None
    id: str | None = None

    @property
    def url(self) -> str:
        return f"/inventory/item/{self.id}"

    @property
    def category_ids(self) -> list[str]:
        return [c.id if isinstance(c, Category) else str(c) for c in self.category]

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> Item:
        categories: list[str | Category] = []
        for ref in doc.get("category") or []:
            if isinstance(ref, Mapping):
                categories.append(Category.from_document(ref))
            else:
                categories.append(str(ref))

        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            name=str(doc.get("name") or ""),
            description=str(doc.get("description") or ""),
            price=doc.get("price"),
            in_stock=doc.get("in_stock"),
            category=categories,
            image=doc.get("image") or None,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "in_stock": self.in_stock,
            "category": [ObjectId(c) for c in self.category_ids],
            "image": self.image,
        }
