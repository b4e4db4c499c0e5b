#!/usr/bin/env python
"""Fleet sizing report over request batch files.

Run:  uv run python scripts/report.py [-v] [batch.json ...]

With no arguments, reports on every batch in data/fixtures/batches/.
For each batch it prints:
  1. The category hierarchy, its upgrade chains and any owned fleet
  2. The requests in processing order
  3. Per strategy: assignment trace, fleet size, new commitments, timeline
  4. A side-by-side summary against the category-free peak
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
BATCHES = ROOT / "data" / "fixtures" / "batches"

sys.path.insert(0, str(ROOT / "src"))

from fleet_sizing.debug import show_timeline
from fleet_sizing.engine import (
    STRATEGIES,
    compare_strategies,
    normalize_requests,
    peak_concurrency,
)
from fleet_sizing.loaders import load_batch_json
from fleet_sizing.types import FleetSizingError, RequestBatch

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def section(title: str, major: bool = False):
    """Batch titles sit between two full-width rules; sections are underlined."""
    if major:
        rule = "#" * WIDTH
        print(f"\n{rule}\n# {title}\n{rule}")
    else:
        print(f"\n  {title}\n  {'~' * len(title)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Left-aligned columns sized to the widest cell."""
    grid = [headers] + [row + [""] * (len(headers) - len(row)) for row in rows]
    widths = [max(map(len, column)) for column in zip(*grid)]

    def line(cells):
        return " " * indent + " | ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    print(line(headers))
    print(" " * indent + "-+-".join("-" * w for w in widths))
    for row in grid[1:]:
        print(line(row))


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
def section_hierarchy(batch: RequestBatch):
    section("Category hierarchy")
    rows = [
        [str(c.rank), c.name, " -> ".join(x.name for x in batch.hierarchy.upgrade_chain(c))]
        for c in batch.hierarchy
    ]
    table(["Rank", "Category", "Upgrade chain"], rows)

    if batch.fleet:
        section("Owned fleet")
        table(["Category", "Available at"], [[c, str(t)] for c, t in batch.fleet])


def section_requests(batch: RequestBatch):
    section("Requests (processing order)")
    ordered = normalize_requests(batch.requests, batch.hierarchy)
    rows = [
        [r.request_id, r.category, str(r.start), str(r.end), str(r.duration)]
        for r in ordered
    ]
    table(["ID", "Category", "Start", "End", "Duration"], rows)


def section_strategies(batch: RequestBatch):
    results = compare_strategies(batch.requests, batch.hierarchy, batch.fleet)
    peak = peak_concurrency(batch.requests)

    for name, result in results.items():
        section(f"Strategy: {name}")
        rows = [
            [
                a.request.request_id,
                a.request.category,
                a.category,
                "reuse" if a.reused else "NEW",
                "yes" if a.upgraded else "",
                a.resource_id or "-",
            ]
            for a in result.assignments
        ]
        table(["ID", "Requested", "Assigned", "Decision", "Upgrade", "Resource"], rows)
        print()
        show_timeline(result)

    section("Summary")
    rows = [
        [
            name,
            str(result.fleet_size),
            ", ".join(f"{k}={v}" for k, v in result.cars_needed.items()) or "(none)",
            str(result.reused_count),
            str(result.upgraded_count),
        ]
        for name, result in results.items()
    ]
    rows.append(["(no categories)", str(peak), "", "", ""])
    table(["Strategy", "Fleet", "New by category", "Reused", "Upgraded"], rows)


def report(path: Path) -> bool:
    try:
        batch = load_batch_json(path)
    except (OSError, ValueError) as e:
        print(f"\n  {path.name}: {e}", file=sys.stderr)
        return False

    section(f"BATCH: {batch.batch_id}  ({len(batch.requests)} requests)", major=True)
    section_hierarchy(batch)
    try:
        section_requests(batch)
        section_strategies(batch)
    except FleetSizingError as e:
        print(f"\n  Batch rejected: {e}", file=sys.stderr)
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("batches", nargs="*", type=Path, help="batch JSON files")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every booking decision")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    paths = args.batches or sorted(BATCHES.glob("*.json"))
    print(f"Strategies: {', '.join(STRATEGIES)}")
    ok = [report(p) for p in paths]
    return 0 if all(ok) else 1


if __name__ == "__main__":
    sys.exit(main())
