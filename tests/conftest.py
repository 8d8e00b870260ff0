"""Shared test fixtures and configuration."""

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def books() -> list[dict[str, Any]]:
    """Four books with distinct prices, in document order."""
    return [
        {"title": "Sayings of the Century", "price": 8.95, "category": "reference"},
        {"title": "Sword of Honour", "price": 12.99, "category": "fiction"},
        {"title": "Moby Dick", "price": 8.99, "category": "fiction"},
        {"title": "The Lord of the Rings", "price": 22.99, "category": "fiction"},
    ]


@pytest.fixture
def store_document(books: list[dict[str, Any]]) -> dict[str, Any]:
    """Classic JSONPath store document wrapping the books."""
    return {
        "store": {
            "book": books,
            "bicycle": {"color": "red", "price": 19.95},
        },
        "owner": "Jane Smith",
        "prices": [10, 20],
    }


@pytest.fixture
def store_file(tmp_path: Path, store_document: dict[str, Any]) -> Path:
    """Store document written to a temporary JSON file."""
    path = tmp_path / "store.json"
    path.write_text(json.dumps(store_document), encoding="utf-8")
    return path
