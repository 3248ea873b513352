"""Record types persisted in MongoDB."""

from inventory_manager.models.category import Category, mark_checked
from inventory_manager.models.item import Item

__all__ = ["Category", "Item", "mark_checked"]
