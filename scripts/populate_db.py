"""Seed MongoDB with sample categories and items.

Usage (PowerShell):
  $env:MONGODB_URI = 'mongodb://localhost:27017'
  $env:MONGODB_DB = 'inventory_manager'
  ./.venv/Scripts/python scripts/populate_db.py

Options:
  --drop-target   clear the items and categories collections first
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from inventory_manager.config import get_config  # noqa: E402
from inventory_manager.db import create_mongo_client  # noqa: E402
from inventory_manager.models import Category, Item  # noqa: E402
from inventory_manager.repositories.category_repository import CATEGORIES, CategoryRepository  # noqa: E402
from inventory_manager.repositories.item_repository import ITEMS, ItemRepository  # noqa: E402
from inventory_manager.schemas.forms import sanitize_text  # noqa: E402

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES: list[tuple[str, str]] = [
    ("Guitars", "Acoustic, classical and electric guitars"),
    ("Keyboards", "Pianos, synthesizers and MIDI controllers"),
    ("Drums", "Acoustic kits, electronic kits and percussion"),
    ("Accessories", "Strings, cables, stands and cases"),
]

# name, description, price, in_stock, category names
SAMPLE_ITEMS: list[tuple[str, str, float, int, list[str]]] = [
    ("Dreadnought Acoustic", "Solid spruce top, mahogany back and sides", 449.0, 6, ["Guitars"]),
    ("Solid Body Electric", "Two humbuckers, maple neck", 699.0, 3, ["Guitars"]),
    ("Stage Piano 88", "Weighted 88-key stage piano", 1199.0, 2, ["Keyboards"]),
    ("Mini Synth", "Analog mono synth with sequencer", 329.0, 5, ["Keyboards"]),
    ("Five Piece Kit", "Birch shells, hardware included", 899.0, 1, ["Drums"]),
    ("Nylon Strings", "Normal tension classical set", 9.5, 40, ["Accessories", "Guitars"]),
    ("Keyboard Stand", "Double-X stand, adjustable height", 39.0, 12, ["Accessories", "Keyboards"]),
]


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    config = get_config()

    parser = argparse.ArgumentParser(description="Seed sample inventory data")
    parser.add_argument("--mongo-uri", dest="mongo_uri", type=str, default=config.MONGODB_URI)
    parser.add_argument("--mongo-db", dest="mongo_db", type=str, default=config.MONGODB_DB)
    parser.add_argument("--drop-target", action="store_true", help="Drop target collections before seeding")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    client = create_mongo_client(args.mongo_uri)
    db = client[args.mongo_db]
    categories = CategoryRepository()
    items = ItemRepository()

    try:
        if args.drop_target:
            db[ITEMS].drop()
            db[CATEGORIES].drop()
            logger.info("Dropped %s and %s", ITEMS, CATEGORIES)

        ids_by_name: dict[str, str] = {}
        for name, description in SAMPLE_CATEGORIES:
            created = categories.create(db, Category(name=sanitize_text(name), description=sanitize_text(description)))
            ids_by_name[name] = str(created.id)

        for name, description, price, in_stock, category_names in SAMPLE_ITEMS:
            items.create(
                db,
                Item(
                    name=sanitize_text(name),
                    description=sanitize_text(description),
                    price=price,
                    in_stock=in_stock,
                    category=[ids_by_name[c] for c in category_names],
                ),
            )
    except PyMongoError:
        logger.exception("Seeding failed")
        return 1
    finally:
        client.close()

    logger.info("Seeded %d categories and %d items", len(SAMPLE_CATEGORIES), len(SAMPLE_ITEMS))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
