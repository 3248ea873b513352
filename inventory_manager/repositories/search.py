"""Atlas Search aggregation stages shared by the item and category stores."""

from __future__ import annotations

from typing import Any


def wildcard_pattern(term: str | None) -> str:
    """Prefix pattern for a search term; a missing term matches everything."""

    return f"{term or ''}*"


def wildcard_search_stage(index: str, term: str | None) -> dict[str, Any]:
    return {
        "$search": {
            "index": index,
            "wildcard": {
                "query": wildcard_pattern(term),
                "path": {"wildcard": "*"},
                "allowAnalyzedField": True,
            },
        }
    }
