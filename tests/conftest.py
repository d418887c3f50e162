"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _quiet_events(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep encode() lifecycle events off stderr unless a test opts in."""
    monkeypatch.delenv("TOON_EVENTS", raising=False)


@pytest.fixture()
def employees() -> list[dict[str, Any]]:
    """A uniform record array: every row has the same primitive fields."""
    return [
        {"id": 1, "name": "Alice", "role": "admin", "active": True},
        {"id": 2, "name": "Bob", "role": "user", "active": False},
        {"id": 3, "name": "Carol", "role": "user", "active": True},
    ]


@pytest.fixture()
def order() -> dict[str, Any]:
    """A nested document mixing records, scalars and wrapper objects."""
    return {
        "order": {"id": "A-100", "status": "shipped"},
        "customer": {"profile": {"contact": {"email": "ann@example.com"}}},
        "items": [
            {"sku": "X1", "qty": 2, "price": 9.5},
            {"sku": "Y2", "qty": 1, "price": 20},
        ],
        "notes": ["fragile", "gift"],
    }
