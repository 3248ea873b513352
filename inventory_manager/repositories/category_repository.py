"""Repository layer for Category persistence."""

from __future__ import annotations

from typing import Any

from pymongo.database import Database

from inventory_manager.models.category import Category
from inventory_manager.repositories.search import wildcard_search_stage
from inventory_manager.utils.object_ids import parse_object_id

CATEGORIES = "categories"


class CategoryRepository:
    """Read and create operations for Category."""

    def __init__(self, collection: str = CATEGORIES) -> None:
        self._collection = collection

    def count(self, db: Database, query: dict[str, Any] | None = None) -> int:
        return int(db[self._collection].count_documents(query or {}))

    def list_all(self, db: Database) -> list[Category]:
        cur = db[self._collection].find({}).sort("name", 1)
        return [Category.from_document(d) for d in cur]

    def get_by_id(self, db: Database, category_id: str) -> Category | None:
        oid = parse_object_id(category_id)
        if oid is None:
            return None
        d = db[self._collection].find_one({"_id": oid})
        return Category.from_document(d) if d else None

    def search(self, db: Database, term: str | None, *, index: str = CATEGORIES) -> list[Category]:
        cur = db[self._collection].aggregate([wildcard_search_stage(index, term)])
        return [Category.from_document(d) for d in cur]

    def create(self, db: Database, category: Category) -> Category:
        result = db[self._collection].insert_one(category.to_document())
        category.id = str(result.inserted_id)
        return category
