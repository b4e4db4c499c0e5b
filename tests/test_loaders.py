"""Tests for JSON loaders and batch validation.

Test data loaded from: data/fixtures/scenarios/loaders.json
                       data/fixtures/batches/*.json
"""

from __future__ import annotations

import json

import pytest

from conftest import BATCHES_DIR, FIXTURES_DIR, load_scenarios

_data = load_scenarios("loaders")


class TestLoadBatch:

    @pytest.mark.parametrize("spec", _data["batches"], ids=lambda s: s["id"])
    def test_requests(self, spec):
        from fleet_sizing.loaders import load_batch_json

        batch = load_batch_json(BATCHES_DIR / spec["file"])
        assert batch.batch_id == spec["expected_batch_id"]
        assert list(batch.hierarchy.names) == spec["expected_categories"]
        got = [[r.request_id, r.category, r.start, r.end] for r in batch.requests]
        assert got == spec["expected_requests"]
        assert [list(f) for f in batch.fleet] == spec.get("expected_fleet", [])

    @pytest.mark.parametrize("spec", _data["batches"], ids=lambda s: s["id"])
    def test_sizes(self, spec):
        from fleet_sizing.engine import size_fleet
        from fleet_sizing.loaders import load_batch_json

        batch = load_batch_json(BATCHES_DIR / spec["file"])
        result = size_fleet(batch.requests, batch.hierarchy, fleet=batch.fleet)
        assert result.fleet_size == spec["expected_fleet_size"]

    def test_accepts_str_path(self):
        from fleet_sizing.loaders import load_batch_json

        batch = load_batch_json(str(BATCHES_DIR / "reference.json"))
        assert len(batch.requests) == 6


class TestInvalidBatch:

    @pytest.mark.parametrize("spec", _data["invalid_batches"], ids=lambda s: s["id"])
    def test_rejected_with_message(self, spec):
        from fleet_sizing.loaders import parse_batch

        with pytest.raises(ValueError) as exc_info:
            parse_batch(spec["data"], spec["id"])
        message = str(exc_info.value)
        assert spec["expected_message"] in message
        assert spec["id"] in message

    def test_all_errors_reported(self):
        from fleet_sizing.schema import validate_batch

        errors = validate_batch(
            {
                "requests": [
                    {"id": "R1", "category": "Luxury", "start": 0, "end": 5},
                    {"id": "R2", "category": "Basic", "start": 9, "end": 1},
                ]
            },
            ["Basic"],
        )
        assert len(errors) == 2
        assert errors[0].startswith("Request R1")
        assert errors[1].startswith("Request R2")

    def test_valid_batch_has_no_errors(self):
        from fleet_sizing.schema import validate_batch

        data = json.loads((BATCHES_DIR / "minute_clock.json").read_text())
        assert validate_batch(data, data["categories"]) == []

    def test_non_object_batch_reported_by_schema(self):
        from fleet_sizing.schema import validate_batch

        assert validate_batch(["Basic"], ["Basic"]) == [
            "batch must be a JSON object, got list"
        ]

    def test_misaligned_datetime(self):
        from fleet_sizing.loaders import parse_batch

        data = {
            "epoch": "2025-01-06T00:00:00",
            "resolution": "hour",
            "requests": [
                {"category": "Basic", "start": "2025-01-06T08:30:00", "end": "2025-01-06T10:00:00"}
            ],
        }
        with pytest.raises(ValueError, match="not aligned"):
            parse_batch(data)


class TestLoadHierarchy:

    def test_from_object(self, tmp_path):
        from fleet_sizing.loaders import load_hierarchy_json

        path = tmp_path / "fleet.json"
        path.write_text(json.dumps({"categories": ["Compact", "SUV", "Van"]}))
        hierarchy = load_hierarchy_json(path)
        assert hierarchy.names == ("Compact", "SUV", "Van")
        assert [c.name for c in hierarchy.upgrade_chain("SUV")] == ["SUV", "Van"]

    def test_from_list(self, tmp_path):
        from fleet_sizing.loaders import load_hierarchy_json

        path = tmp_path / "fleet.json"
        path.write_text(json.dumps(["Basic"]))
        assert len(load_hierarchy_json(path)) == 1

    def test_fixture_entries(self, tmp_path):
        """Every entry of hierarchies.json loads on its own."""
        from fleet_sizing.loaders import load_hierarchy_json

        hierarchies = json.loads((FIXTURES_DIR / "hierarchies.json").read_text())
        for name, entry in hierarchies.items():
            path = tmp_path / f"{name}.json"
            path.write_text(json.dumps(entry))
            assert list(load_hierarchy_json(path).names) == entry["categories"]

    @pytest.mark.parametrize(
        "categories, message",
        [
            ([], "non-empty list"),
            (["Basic", "Basic"], "duplicate name"),
            (["Basic", ""], "invalid name"),
            (["Basic", 3], "invalid name"),
        ],
    )
    def test_invalid(self, tmp_path, categories, message):
        from fleet_sizing.loaders import load_hierarchy_json

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"categories": categories}))
        with pytest.raises(ValueError, match=message) as exc_info:
            load_hierarchy_json(path)
        assert "bad.json" in str(exc_info.value)

    def test_object_without_categories_key(self, tmp_path):
        from fleet_sizing.loaders import load_hierarchy_json

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"names": ["Basic", "Premium"]}))
        with pytest.raises(ValueError, match="non-empty list, got None"):
            load_hierarchy_json(path)
