"""Create the Atlas Search indexes the search page queries.

Reads MONGODB_URI / MONGODB_DB from .env / environment and creates one
dynamic-mapping search index per collection (skipped when it already exists).

Usage:
  ./.venv/Scripts/python scripts/create_search_indexes.py
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from pymongo.errors import PyMongoError
from pymongo.operations import SearchIndexModel

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from inventory_manager.config import get_config  # noqa: E402
from inventory_manager.db import create_mongo_client  # noqa: E402
from inventory_manager.repositories.category_repository import CATEGORIES  # noqa: E402
from inventory_manager.repositories.item_repository import ITEMS  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Create the search indexes for items and categories."""

    load_dotenv()
    config = get_config()

    parser = argparse.ArgumentParser(description="Create Atlas Search indexes")
    parser.add_argument("--mongo-uri", dest="mongo_uri", type=str, default=config.MONGODB_URI)
    parser.add_argument("--mongo-db", dest="mongo_db", type=str, default=config.MONGODB_DB)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    client = create_mongo_client(args.mongo_uri)
    db = client[args.mongo_db]
    wanted = {ITEMS: config.ITEMS_SEARCH_INDEX, CATEGORIES: config.CATEGORIES_SEARCH_INDEX}

    try:
        for collection, index_name in wanted.items():
            existing = {ix.get("name") for ix in db[collection].list_search_indexes()}
            if index_name in existing:
                logger.info("Search index %s.%s already exists", collection, index_name)
                continue

            db[collection].create_search_index(
                SearchIndexModel(definition={"mappings": {"dynamic": True}}, name=index_name)
            )
            logger.info("Created search index %s.%s", collection, index_name)
    except PyMongoError:
        logger.exception("Could not create search indexes (Atlas Search required)")
        return 1
    finally:
        client.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
