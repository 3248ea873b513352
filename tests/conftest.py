"""
Shared pytest fixtures.

The Flask app is created for real (the Mongo client connects lazily, so no
server is needed); the repositories behind every blueprint's service are
swapped for in-memory fakes so handlers run end to end.
"""

import os
from unittest.mock import MagicMock

import pytest
from bson import ObjectId

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from inventory_manager import create_app  # noqa: E402
from inventory_manager.models import Category, Item  # noqa: E402
from inventory_manager.routes import categories as categories_routes  # noqa: E402
from inventory_manager.routes import items as items_routes  # noqa: E402
from inventory_manager.routes import web as web_routes  # noqa: E402


class FakeCategoryRepository:
    """In-memory stand-in for CategoryRepository."""

    def __init__(self):
        self.docs = {}

    def add(self, name, description=""):
        category = Category(id=str(ObjectId()), name=name, description=description)
        self.docs[category.id] = category
        return category

    def _copy(self, category):
        return Category(id=category.id, name=category.name, description=category.description)

    def count(self, db, query=None):
        return len(self.docs)

    def list_all(self, db):
        return [self._copy(c) for c in sorted(self.docs.values(), key=lambda c: c.name)]

    def get_by_id(self, db, category_id):
        category = self.docs.get(str(category_id))
        return self._copy(category) if category else None

    def search(self, db, term, *, index="categories"):
        prefix = (term or "").lower()
        return [self._copy(c) for c in self.docs.values() if c.name.lower().startswith(prefix)]

    def create(self, db, category):
        category.id = str(ObjectId())
        self.docs[category.id] = self._copy(category)
        return category


class FakeItemRepository:
    """In-memory stand-in for ItemRepository; joins against a FakeCategoryRepository."""

    def __init__(self, categories):
        self.docs = {}
        self.categories = categories

    def _copy(self, item, *, joined=False):
        refs = list(item.category_ids)
        if joined:
            refs = [self.categories.get_by_id(None, ref) for ref in refs]
            refs = [c for c in refs if c is not None]
        return Item(
            id=item.id,
            name=item.name,
            description=item.description,
            price=item.price,
            in_stock=item.in_stock,
            category=refs,
            image=item.image,
        )

    def add(self, name, *, description="A test item", price=10.0, in_stock=1, category=(), image=None):
        item = Item(
            id=str(ObjectId()),
            name=name,
            description=description,
            price=price,
            in_stock=in_stock,
            category=list(category),
            image=image,
        )
        self.docs[item.id] = item
        return item

    def count(self, db, query=None):
        return len(self.docs)

    def list_with_image(self, db, limit):
        return [self._copy(i) for i in self.docs.values() if i.image][:limit]

    def list_items(self, db):
        return [self._copy(i, joined=True) for i in sorted(self.docs.values(), key=lambda i: i.name)]

    def list_by_category(self, db, category_id):
        return [self._copy(i) for i in self.docs.values() if str(category_id) in i.category_ids]

    def get_by_id(self, db, item_id, *, with_categories=False):
        item = self.docs.get(str(item_id))
        return self._copy(item, joined=with_categories) if item else None

    def search(self, db, term, *, index="items"):
        prefix = (term or "").lower()
        return [self._copy(i, joined=True) for i in self.docs.values() if i.name.lower().startswith(prefix)]

    def create(self, db, item):
        item.id = str(ObjectId())
        self.docs[item.id] = self._copy(item)
        return item

    def replace(self, db, item_id, item):
        if str(item_id) not in self.docs:
            return None
        item.id = str(item_id)
        self.docs[item.id] = self._copy(item)
        return self._copy(item)

    def delete(self, db, item_id):
        return self.docs.pop(str(item_id), None) is not None


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "PARALLEL_WORKERS": 2,
        }
    )
    app.extensions["mongo_db"] = MagicMock(name="mongo_db")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def stores(monkeypatch):
    """Install in-memory repositories behind every blueprint's service."""

    categories = FakeCategoryRepository()
    items = FakeItemRepository(categories)

    for service in (items_routes._service, web_routes._service):
        monkeypatch.setattr(service, "_items", items)
        monkeypatch.setattr(service, "_categories", categories)
    monkeypatch.setattr(categories_routes._service, "_items", items)
    monkeypatch.setattr(categories_routes._service, "_categories", categories)

    return items, categories
