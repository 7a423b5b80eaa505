"""Tests for bot_planner reporter."""

import json
from decimal import Decimal

from bot_planner.config import EstimatorSettings, PlannerConfig
from bot_planner.preview import build_preview
from bot_planner.reporter import _preview_to_dict, print_console, save_json


def _make_previews(raw_draft):
    invalid = dict(raw_draft, name="", lowerPrice=300)
    return [
        build_preview(raw_draft, EstimatorSettings(), api_key_ids=[1]),
        build_preview(invalid, EstimatorSettings(), api_key_ids=[1], label="Draft 2"),
    ]


class TestPreviewToDict:
    """Test _preview_to_dict helper."""

    def test_valid_preview(self, raw_draft):
        preview = build_preview(raw_draft, EstimatorSettings())
        result = _preview_to_dict(preview)

        assert result["valid"] is True
        assert result["errors"] == []
        assert result["levels"][0] == Decimal(100)
        assert result["projection"]["display"]["monthly_profit"] == "15.90"
        assert result["create_request"]["name"] == "BTC range bot"

    def test_invalid_preview(self, raw_draft):
        preview = build_preview(dict(raw_draft, lowerPrice=300), EstimatorSettings())
        result = _preview_to_dict(preview)

        assert result["valid"] is False
        assert result["can_estimate"] is False
        assert result["create_request"] is None
        assert result["errors"] == [{"field": "lower_price", "message": "Lower price must be below upper price"}]


class TestSaveJson:
    """Test JSON report output."""

    def test_writes_file(self, tmp_path, raw_draft):
        config = PlannerConfig(estimator={"daily_grid_crossings": 2})
        path = save_json(_make_previews(raw_draft), config, str(tmp_path / "out"))

        with open(path) as f:
            data = json.load(f)

        assert data["estimator"]["daily_grid_crossings"] == "2"
        assert data["summary"] == {"total": 2, "valid": 1, "estimable": 1}
        assert data["drafts"][0]["levels"] == ["100", "125", "150", "175", "200"]
        assert data["drafts"][1]["label"] == "Draft 2"
        assert len(data["drafts"][1]["errors"]) == 2

    def test_creates_output_dir(self, tmp_path, raw_draft):
        out = tmp_path / "nested" / "dir"
        save_json([], PlannerConfig(), str(out))

        assert out.is_dir()


class TestPrintConsole:
    """Smoke tests for rich output."""

    def test_prints_without_error(self, raw_draft, capsys):
        print_console(_make_previews(raw_draft))

    def test_prints_seeded_range(self, raw_draft):
        raw_draft.update(lowerPrice=0, upperPrice=0)
        preview = build_preview(raw_draft, EstimatorSettings(), last_price=Decimal("50000"))

        print_console([preview])

    def test_prints_numeric_name(self, raw_draft):
        preview = build_preview(dict(raw_draft, name=123), EstimatorSettings())

        print_console([preview])

    def test_prints_non_finite_draft(self, raw_draft):
        preview = build_preview(dict(raw_draft, upperPrice="NaN"), EstimatorSettings())

        print_console([preview])
