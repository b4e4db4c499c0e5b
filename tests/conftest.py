"""Shared test fixtures and data loading for fleet-sizing.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
BATCHES_DIR = FIXTURES_DIR / "batches"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_hierarchies = _load_json(FIXTURES_DIR / "hierarchies.json")

STRATEGY_NAMES = ("partitioned", "unified")


# ---------------------------------------------------------------------------
# Factories (importable by test modules)
# ---------------------------------------------------------------------------
def make_hierarchy(name: str = "standard"):
    """Build a CategoryHierarchy from hierarchies.json by name."""
    from fleet_sizing.categories import CategoryHierarchy

    return CategoryHierarchy(_hierarchies[name]["categories"])


def make_requests(entries: list[dict]):
    """Build Requests from scenario dicts {id, category, start, end}."""
    from fleet_sizing.types import Request

    return [
        Request(e["category"], e["start"], e["end"], e.get("id", ""))
        for e in entries
    ]


def req(category: str, start: int, end: int, request_id: str = ""):
    """Shorthand for a single Request."""
    from fleet_sizing.types import Request

    return Request(category, start, end, request_id)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def standard_hierarchy():
    return make_hierarchy("standard")


@pytest.fixture
def single_hierarchy():
    return make_hierarchy("single")


@pytest.fixture
def two_tier_hierarchy():
    return make_hierarchy("two_tier")
