"""Service layer for item use-cases."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pymongo.database import Database
from werkzeug.datastructures import FileStorage

from inventory_manager.errors import NotFoundError
from inventory_manager.models.category import Category, mark_checked
from inventory_manager.models.item import Item
from inventory_manager.repositories.category_repository import CategoryRepository
from inventory_manager.repositories.item_repository import ItemRepository
from inventory_manager.schemas.forms import FormError
from inventory_manager.schemas.item import LIST_FIELDS, TEXT_FIELDS, ItemFormSchema
from inventory_manager.services.form_pipeline import FormOutcome, process_submission
from inventory_manager.services.upload_service import ImageStore
from inventory_manager.utils.parallel import DEFAULT_WORKERS, run_parallel

logger = logging.getLogger(__name__)


def build_item(values: Mapping[str, Any], *, image: str | None = None, item_id: str | None = None) -> Item:
    """Candidate item from loaded (or as-submitted) form values."""

    return Item(
        id=item_id,
        name=values.get("name") or "",
        description=values.get("description") or "",
        price=values.get("price"),
        in_stock=values.get("in_stock"),
        category=list(values.get("category") or []),
        image=image,
    )


class ItemService:
    """Item use-cases."""

    def __init__(
        self,
        items: ItemRepository | None = None,
        categories: CategoryRepository | None = None,
    ) -> None:
        self._items = items or ItemRepository()
        self._categories = categories or CategoryRepository()
        self._schema = ItemFormSchema()

    def list_items(self, db: Database) -> list[Item]:
        return self._items.list_items(db)

    def find_item(self, db: Database, item_id: str) -> Item | None:
        return self._items.get_by_id(db, item_id)

    def get_item(self, db: Database, item_id: str) -> Item:
        item = self._items.get_by_id(db, item_id, with_categories=True)
        if item is None:
            raise NotFoundError(message="Item not found")
        return item

    def checked_categories(self, db: Database, item: Item) -> list[Category]:
        return mark_checked(self._categories.list_all(db), item.category_ids)

    def new_item_form(self, db: Database) -> list[Category]:
        return self._categories.list_all(db)

    def edit_item_form(
        self, db: Database, item_id: str, *, max_workers: int = DEFAULT_WORKERS
    ) -> tuple[Item, list[Category]]:
        """Load the item and every category together, flagging the item's categories."""

        loaded = run_parallel(
            {
                "item": lambda: self._items.get_by_id(db, item_id),
                "categories": lambda: self._categories.list_all(db),
            },
            max_workers=max_workers,
        )
        item: Item | None = loaded["item"]
        if item is None:
            raise NotFoundError(message="Item not found")
        return item, mark_checked(loaded["categories"], item.category_ids)

    def create_item(
        self,
        db: Database,
        form: Mapping[str, Any],
        upload: FileStorage | None = None,
        images: ImageStore | None = None,
    ) -> FormOutcome[Item]:
        def persist(item: Item) -> Item:
            if images is not None:
                item.image = images.save(upload)
            created = self._items.create(db, item)
            logger.info("Created item %s (%s)", created.id, created.name)
            return created

        return process_submission(
            form,
            schema=self._schema,
            build=build_item,
            persist=persist,
            load_choices=lambda item: self.checked_categories(db, item),
            text_fields=TEXT_FIELDS,
            list_fields=LIST_FIELDS,
            extra_errors=_upload_errors(upload, images),
        )

    def update_item(
        self,
        db: Database,
        item_id: str,
        form: Mapping[str, Any],
        upload: FileStorage | None = None,
        images: ImageStore | None = None,
    ) -> FormOutcome[Item]:
        """Replace the stored item; a new upload wins over the stored image."""

        existing = self._items.get_by_id(db, item_id)
        if existing is None:
            raise NotFoundError(message="Item not found")

        def persist(item: Item) -> Item:
            if images is not None:
                item.image = images.save(upload) or item.image
            updated = self._items.replace(db, item_id, item)
            if updated is None:
                raise NotFoundError(message="Item not found")
            logger.info("Updated item %s", updated.id)
            return updated

        return process_submission(
            form,
            schema=self._schema,
            build=lambda values: build_item(values, image=existing.image, item_id=existing.id),
            persist=persist,
            load_choices=lambda item: self.checked_categories(db, item),
            text_fields=TEXT_FIELDS,
            list_fields=LIST_FIELDS,
            extra_errors=_upload_errors(upload, images),
        )

    def delete_item(self, db: Database, item_id: str) -> bool:
        deleted = self._items.delete(db, item_id)
        if deleted:
            logger.info("Deleted item %s", item_id)
        else:
            logger.info("Delete of item %s matched nothing", item_id)
        return deleted


def _upload_errors(upload: FileStorage | None, images: ImageStore | None) -> list[FormError]:
    if images is None:
        return []
    error = images.check(upload)
    return [error] if error is not None else []
