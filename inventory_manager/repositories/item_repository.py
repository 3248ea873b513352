"""Repository layer for Item persistence."""

from __future__ import annotations

from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from inventory_manager.models.item import Item
from inventory_manager.repositories.category_repository import CATEGORIES
from inventory_manager.repositories.search import wildcard_search_stage
from inventory_manager.utils.object_ids import parse_object_id

ITEMS = "items"

# Replaces the stored category ids with the referenced category documents.
_JOIN_CATEGORIES: dict[str, Any] = {
    "$lookup": {
        "from": CATEGORIES,
        "localField": "category",
        "foreignField": "_id",
        "as": "category",
    }
}

_HAS_IMAGE: dict[str, Any] = {"image": {"$exists": True, "$nin": [None, ""]}}


class ItemRepository:
    """CRUD and search operations for Item."""

    def __init__(self, collection: str = ITEMS) -> None:
        self._collection = collection

    def count(self, db: Database, query: dict[str, Any] | None = None) -> int:
        return int(db[self._collection].count_documents(query or {}))

    def list_with_image(self, db: Database, limit: int) -> list[Item]:
        cur = db[self._collection].find(_HAS_IMAGE).limit(int(limit))
        return [Item.from_document(d) for d in cur]

    def list_items(self, db: Database) -> list[Item]:
        cur = db[self._collection].aggregate([{"$sort": {"name": 1}}, _JOIN_CATEGORIES])
        return [Item.from_document(d) for d in cur]

    def list_by_category(self, db: Database, category_id: str) -> list[Item]:
        oid = parse_object_id(category_id)
        if oid is None:
            return []
        cur = db[self._collection].find({"category": oid}).sort("name", 1)
        return [Item.from_document(d) for d in cur]

    def get_by_id(self, db: Database, item_id: str, *, with_categories: bool = False) -> Item | None:
        oid = parse_object_id(item_id)
        if oid is None:
            return None

        if not with_categories:
            d = db[self._collection].find_one({"_id": oid})
            return Item.from_document(d) if d else None

        cur = db[self._collection].aggregate([{"$match": {"_id": oid}}, {"$limit": 1}, _JOIN_CATEGORIES])
        docs = list(cur)
        return Item.from_document(docs[0]) if docs else None

    def search(self, db: Database, term: str | None, *, index: str = ITEMS) -> list[Item]:
        cur = db[self._collection].aggregate([wildcard_search_stage(index, term), _JOIN_CATEGORIES])
        return [Item.from_document(d) for d in cur]

    def create(self, db: Database, item: Item) -> Item:
        result = db[self._collection].insert_one(item.to_document())
        item.id = str(result.inserted_id)
        return item

    def replace(self, db: Database, item_id: str, item: Item) -> Item | None:
        oid = parse_object_id(item_id)
        if oid is None:
            return None
        d = db[self._collection].find_one_and_replace(
            {"_id": oid},
            item.to_document(),
            return_document=ReturnDocument.AFTER,
        )
        return Item.from_document(d) if d else None

    def delete(self, db: Database, item_id: str) -> bool:
        oid = parse_object_id(item_id)
        if oid is None:
            return False
        return db[self._collection].find_one_and_delete({"_id": oid}) is not None
