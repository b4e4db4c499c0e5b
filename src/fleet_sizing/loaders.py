"""Data loading utilities for category hierarchies and request batches."""

from __future__ import annotations

import json
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from fleet_sizing.categories import DEFAULT_HIERARCHY, CategoryHierarchy
from fleet_sizing.resolution import RESOLUTIONS
from fleet_sizing.schema import validate_batch, validate_categories
from fleet_sizing.types import Request, RequestBatch


def _raise_if_errors(errors: list[str], source: str) -> None:
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def load_hierarchy_json(path: str | Path) -> CategoryHierarchy:
    """Load a CategoryHierarchy from a JSON file.

    Accepts either {"categories": ["Basic", "Premium", ...]} or a bare list.
    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    categories = data.get("categories") if isinstance(data, dict) else data
    _raise_if_errors(validate_categories(categories), path.name)
    return CategoryHierarchy(categories)


def parse_batch(data: dict, source: str = "<batch>") -> RequestBatch:
    """Build a RequestBatch from an already-decoded JSON object.

    The format:
    {
        "id": "...",
        "categories": ["Basic", "Premium", "Enterprise"],   (optional)
        "epoch": "2025-01-06T00:00:00",                     (optional)
        "resolution": "minute",                             (optional)
        "requests": [
            {"id": "R1", "category": "Basic", "start": 0, "end": 60},
            ...
        ]
    }

    With an epoch, start/end may be naive ISO datetimes; they are converted
    to integers at the given resolution (default millisecond).

    An optional "fleet" list seeds resources that already exist:
        "fleet": [{"category": "Premium", "available_at": 0}, ...]

    Raises ValueError if validation fails.
    """
    if not isinstance(data, dict):
        _raise_if_errors(
            [f"batch must be a JSON object, got {type(data).__name__}"], source
        )

    if "categories" in data:
        _raise_if_errors(validate_categories(data["categories"]), source)
        hierarchy = CategoryHierarchy(data["categories"])
    else:
        hierarchy = DEFAULT_HIERARCHY

    _raise_if_errors(validate_batch(data, list(hierarchy.names)), source)

    resolution = RESOLUTIONS[data.get("resolution", "millisecond")]
    epoch = datetime.fromisoformat(data["epoch"]) if "epoch" in data else None

    def to_time(value: int | str) -> int:
        if isinstance(value, int):
            return value
        return resolution.to_int(datetime.fromisoformat(value), epoch)

    requests = tuple(
        Request(
            category=entry["category"],
            start=to_time(entry["start"]),
            end=to_time(entry["end"]),
            request_id=str(entry.get("id", f"R{i + 1}")),
        )
        for i, entry in enumerate(data["requests"])
    )
    fleet = tuple(
        (entry["category"], to_time(entry["available_at"]))
        for entry in data.get("fleet", [])
    )
    return RequestBatch(
        batch_id=data.get("id", source),
        hierarchy=hierarchy,
        requests=requests,
        fleet=fleet,
    )


def load_batch_json(path: str | Path) -> RequestBatch:
    """Load a request batch from a JSON file. See parse_batch for the format."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    batch = parse_batch(data, path.name)
    if "id" not in data:
        batch = replace(batch, batch_id=path.stem)
    return batch
