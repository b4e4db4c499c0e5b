"""Input validation for hierarchy definitions and request batches."""

from __future__ import annotations

from datetime import datetime

from fleet_sizing.resolution import RESOLUTIONS


def validate_categories(categories: object) -> list[str]:
    """Validate an ordered category list. Returns error messages (empty = valid).

    Checks:
    - A non-empty list
    - Every name is a non-blank string
    - No name appears twice
    """
    if not isinstance(categories, list) or not categories:
        return [f"categories must be a non-empty list, got {categories!r}"]

    errors: list[str] = []
    seen: set[str] = set()
    for i, name in enumerate(categories):
        if not isinstance(name, str) or not name.strip():
            errors.append(f"Category {i}: invalid name {name!r}")
            continue
        if name in seen:
            errors.append(f"Category {i}: duplicate name {name!r}")
        seen.add(name)
    return errors


def _parse_time(value: object, epoch: datetime | None) -> int | datetime | None:
    """Integer time as-is; ISO string as datetime when an epoch is set."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if epoch is not None and isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def validate_batch(data: dict, categories: list[str]) -> list[str]:
    """Validate a raw request batch against the category names it runs with.

    Checks:
    - epoch (optional) parses as an ISO datetime
    - resolution (optional) is a known label
    - Each request has category, start and end
    - Categories are part of the hierarchy
    - Times are integers, or ISO datetimes when an epoch is given
    - start < end
    - fleet (optional) entries name a known category and an available_at time
    """
    if not isinstance(data, dict):
        return [f"batch must be a JSON object, got {type(data).__name__}"]

    errors: list[str] = []

    epoch = None
    if "epoch" in data:
        try:
            epoch = datetime.fromisoformat(data["epoch"])
        except (ValueError, TypeError):
            errors.append(f"Invalid epoch: {data['epoch']!r}")

    resolution = data.get("resolution", "millisecond")
    if resolution not in RESOLUTIONS:
        errors.append(
            f"Unknown resolution {resolution!r} "
            f"(expected one of {', '.join(RESOLUTIONS)})"
        )

    known = set(categories)
    errors.extend(_validate_fleet(data.get("fleet", []), known, epoch))

    requests = data.get("requests")
    if not isinstance(requests, list):
        errors.append("requests must be a list")
        return errors

    for i, entry in enumerate(requests):
        label = entry.get("id", i) if isinstance(entry, dict) else i
        if not isinstance(entry, dict):
            errors.append(f"Request {label}: expected an object, got {entry!r}")
            continue

        missing = [k for k in ("category", "start", "end") if k not in entry]
        if missing:
            errors.append(f"Request {label}: missing {', '.join(missing)}")
            continue

        if not isinstance(entry["category"], str) or entry["category"] not in known:
            errors.append(
                f"Request {label}: unknown category {entry['category']!r}"
            )

        start = _parse_time(entry["start"], epoch)
        end = _parse_time(entry["end"], epoch)
        if start is None or end is None:
            errors.append(
                f"Request {label}: start and end must be integers"
                + (" or ISO datetimes" if epoch is not None else "")
            )
            continue
        if type(start) is not type(end):
            errors.append(f"Request {label}: start and end use different formats")
            continue
        if start >= end:
            errors.append(
                f"Request {label}: start {entry['start']} is not before "
                f"end {entry['end']}"
            )

    return errors


def _validate_fleet(
    fleet: object, known: set[str], epoch: datetime | None
) -> list[str]:
    if not isinstance(fleet, list):
        return ["fleet must be a list"]

    errors: list[str] = []
    for i, entry in enumerate(fleet):
        if not isinstance(entry, dict) or not {"category", "available_at"} <= entry.keys():
            errors.append(f"Fleet {i}: expected an object with category and available_at")
            continue
        if not isinstance(entry["category"], str) or entry["category"] not in known:
            errors.append(f"Fleet {i}: unknown category {entry['category']!r}")
        if _parse_time(entry["available_at"], epoch) is None:
            errors.append(f"Fleet {i}: invalid available_at {entry['available_at']!r}")
    return errors
