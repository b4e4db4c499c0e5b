"""Tests for the ASCII timeline (dev-only visualisation)."""

from __future__ import annotations

from conftest import load_scenarios, make_requests

_data = load_scenarios("engine")


def _reference_requests():
    spec = next(s for s in _data["size_fleet"] if s["id"] == "reference_sample")
    return make_requests(spec["requests"])


def test_one_row_per_resource(capsys):
    from fleet_sizing.debug import show_timeline
    from fleet_sizing.engine import size_fleet

    result = size_fleet(_reference_requests(), strategy="partitioned")
    text = show_timeline(result, width=44)

    assert capsys.readouterr().out.strip() == text.strip()
    rows = [line for line in text.splitlines() if line.lstrip().startswith(("Basic-", "Premium-", "Enterprise-"))]
    assert len(rows) == result.fleet_size
    premium_row = next(r for r in rows if r.lstrip().startswith("Premium-1"))
    # R6, R1 and R2 share Premium-1: first three labels in processing order
    assert {"A", "B", "D"} <= set(premium_row.split()[-1])


def test_unified_rows_per_request():
    from fleet_sizing.debug import show_timeline
    from fleet_sizing.engine import size_fleet

    result = size_fleet(_reference_requests(), strategy="unified")
    text = show_timeline(result)
    assert "R6 (Premium)" in text
    assert "upgrade" in text
    assert "[unified] fleet_size=2" in text


def test_empty_batch():
    from fleet_sizing.debug import show_timeline
    from fleet_sizing.engine import size_fleet

    assert "no requests" in show_timeline(size_fleet([]))
