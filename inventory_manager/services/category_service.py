"""Service layer for category use-cases."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pymongo.database import Database

from inventory_manager.errors import NotFoundError
from inventory_manager.models.category import Category
from inventory_manager.models.item import Item
from inventory_manager.repositories.category_repository import CategoryRepository
from inventory_manager.repositories.item_repository import ItemRepository
from inventory_manager.schemas.category import TEXT_FIELDS, CategoryFormSchema
from inventory_manager.services.form_pipeline import FormOutcome, process_submission
from inventory_manager.utils.parallel import DEFAULT_WORKERS, run_parallel

logger = logging.getLogger(__name__)


class CategoryService:
    """Category use-cases."""

    def __init__(
        self,
        categories: CategoryRepository | None = None,
        items: ItemRepository | None = None,
    ) -> None:
        self._categories = categories or CategoryRepository()
        self._items = items or ItemRepository()
        self._schema = CategoryFormSchema()

    def list_categories(self, db: Database) -> list[Category]:
        return self._categories.list_all(db)

    def get_category(
        self, db: Database, category_id: str, *, max_workers: int = DEFAULT_WORKERS
    ) -> tuple[Category, list[Item]]:
        """The category together with the items filed under it."""

        loaded = run_parallel(
            {
                "category": lambda: self._categories.get_by_id(db, category_id),
                "items": lambda: self._items.list_by_category(db, category_id),
            },
            max_workers=max_workers,
        )
        category: Category | None = loaded["category"]
        if category is None:
            raise NotFoundError(message="Category not found")
        return category, loaded["items"]

    def create_category(self, db: Database, form: Mapping[str, Any]) -> FormOutcome[Category]:
        def persist(category: Category) -> Category:
            created = self._categories.create(db, category)
            logger.info("Created category %s (%s)", created.id, created.name)
            return created

        return process_submission(
            form,
            schema=self._schema,
            build=lambda values: Category(
                name=values.get("name") or "",
                description=values.get("description") or "",
            ),
            persist=persist,
            text_fields=TEXT_FIELDS,
        )
