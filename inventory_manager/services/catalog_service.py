"""Dashboard and search use-cases spanning items and categories."""

from __future__ import annotations

from dataclasses import dataclass

from pymongo.database import Database

from inventory_manager.models.category import Category
from inventory_manager.models.item import Item
from inventory_manager.repositories.category_repository import CATEGORIES, CategoryRepository
from inventory_manager.repositories.item_repository import ITEMS, ItemRepository
from inventory_manager.utils.parallel import DEFAULT_WORKERS, run_parallel


@dataclass(frozen=True)
class Dashboard:
    total_items: int
    total_categories: int
    item_images: list[Item]


class CatalogService:
    """Reads that combine both collections."""

    def __init__(
        self,
        items: ItemRepository | None = None,
        categories: CategoryRepository | None = None,
    ) -> None:
        self._items = items or ItemRepository()
        self._categories = categories or CategoryRepository()

    def dashboard(self, db: Database, *, image_limit: int = 5, max_workers: int = DEFAULT_WORKERS) -> Dashboard:
        loaded = run_parallel(
            {
                "total_items": lambda: self._items.count(db),
                "total_categories": lambda: self._categories.count(db),
                "item_images": lambda: self._items.list_with_image(db, image_limit),
            },
            max_workers=max_workers,
        )
        return Dashboard(**loaded)

    def search(
        self,
        db: Database,
        term: str | None,
        *,
        items_index: str = ITEMS,
        categories_index: str = CATEGORIES,
        max_workers: int = DEFAULT_WORKERS,
    ) -> list[Item | Category]:
        """Wildcard-search both collections; items come first, then categories."""

        loaded = run_parallel(
            {
                "items": lambda: self._items.search(db, term, index=items_index),
                "categories": lambda: self._categories.search(db, term, index=categories_index),
            },
            max_workers=max_workers,
        )
        return [*loaded["items"], *loaded["categories"]]
