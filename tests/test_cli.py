"""Tests for the command line entry point."""

import json
import logging
from datetime import datetime, timezone

import pytest

import run


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("hostcost")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def servers_file(tmp_path):
    path = tmp_path / "servers.json"
    path.write_text(json.dumps([
        {"id": "a", "name": "alpha", "monthlyCost": 300, "expire": "2025-06-11T10:00:00"},
        {"id": "b", "name": "beta", "monthlyCost": 50, "expire": "not-a-date"},
    ]), encoding="utf-8")
    return path


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self):
        """Test unset options defer to config."""
        args = run.parse_args([])

        assert args.input is None
        assert args.horizon_days is None
        assert args.mode is None
        assert args.dashboard is False

    def test_reference_parsed(self):
        """Test the reference instant is parsed as ISO."""
        args = run.parse_args(["--reference", "2025-06-01T10:00:00"])

        assert args.reference.year == 2025
        assert args.reference.hour == 10

    def test_reference_utc_suffix(self):
        """Test a trailing Z is read as UTC."""
        args = run.parse_args(["--reference", "2025-06-01T02:00:00Z"])

        assert args.reference == datetime(2025, 6, 1, 2, tzinfo=timezone.utc)

    def test_reference_invalid(self):
        """Test an unparsable reference is a usage error."""
        with pytest.raises(SystemExit) as exc:
            run.parse_args(["--reference", "not-a-date"])

        assert exc.value.code == 2


class TestMain:
    """Tests for main."""

    def test_json_report(self, servers_file, capsys):
        """Test the JSON report for a fixed reference time."""
        run.main([
            "--input", str(servers_file),
            "--reference", "2025-06-01T10:00:00",
            "--locale", "en-US",
            "--months", "2",
            "--json",
        ])

        output = json.loads(capsys.readouterr().out)

        assert output["summary"]["mode"] == "prorated"
        assert output["summary"]["active_servers"] == 1
        assert output["summary"]["total_cost_in_horizon"] == pytest.approx(98.56, abs=0.01)
        assert len(output["summary"]["warnings"]) == 1
        assert [f["month"] for f in output["forecast"]] == ["Jul 2025", "Aug 2025"]
        assert [f["cost"] for f in output["forecast"]] == [0, 0]

    def test_flat_text_report(self, servers_file, capsys):
        """Test the text summary in flat mode."""
        run.main([
            "--input", str(servers_file),
            "--mode", "flat",
            "--locale", "en-US",
            "--currency", "$",
            "--months", "1",
        ])

        out = capsys.readouterr().out

        assert "flat" in out
        assert "$4,200" in out
        assert "Servers Charged:       2" in out

    def test_chart_written(self, servers_file, tmp_path):
        """Test the forecast chart is saved as HTML."""
        chart = tmp_path / "forecast.html"

        run.main(["--input", str(servers_file), "--months", "3", "--chart", str(chart)])

        assert chart.exists()
        assert "plotly" in chart.read_text(encoding="utf-8").lower()

    def test_missing_input_exits(self, tmp_path):
        """Test a missing data file exits with status 1."""
        with pytest.raises(SystemExit) as exc:
            run.main(["--input", str(tmp_path / "missing.json")])

        assert exc.value.code == 1

    def test_zero_horizon_and_months_are_clamped(self, servers_file, capsys):
        """Test explicit zeros reach the engine clamps instead of the config defaults."""
        run.main([
            "--input", str(servers_file),
            "--reference", "2025-06-01T10:00:00",
            "--horizon-days", "0",
            "--months", "0",
            "--locale", "en-US",
            "--json",
        ])

        output = json.loads(capsys.readouterr().out)

        assert output["summary"]["horizon_days"] == 1
        assert output["summary"]["total_cost_in_horizon"] == pytest.approx(300 / 30.436875, abs=0.01)
        assert len(output["forecast"]) == 1
