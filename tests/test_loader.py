"""Tests for the server list loader."""

import json
from datetime import datetime

import pandas as pd
import pytest

from hostcost.cost.calculator import compute_costs
from hostcost.cost.exceptions import InvalidInputShape
from hostcost.input.loader import ServerListLoader


def write_json(path, payload):
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


class TestServerListLoader:
    """Tests for ServerListLoader."""

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ServerListLoader(tmp_path / "missing.json")

    def test_json_array(self, tmp_path):
        """Test a bare JSON array."""
        path = write_json(tmp_path / "servers.json", [
            {"id": "a", "monthlyCost": 45, "expire": "2026-12-31"},
        ])

        servers = ServerListLoader(path).load()

        assert servers == [{"id": "a", "monthlyCost": 45, "expire": "2026-12-31"}]

    def test_json_wrapped(self, tmp_path):
        """Test an object with a servers array."""
        path = write_json(tmp_path / "servers.json", {"servers": [{"id": "a"}]})

        assert ServerListLoader(path).load() == [{"id": "a"}]

    def test_json_not_a_list(self, tmp_path):
        """Test a non-list document gives an empty list."""
        path = write_json(tmp_path / "servers.json", {"id": "a"})

        assert ServerListLoader(path).load() == []

    def test_json_not_a_list_strict(self, tmp_path):
        """Test strict mode raises InvalidInputShape."""
        path = write_json(tmp_path / "servers.json", "nope")

        with pytest.raises(InvalidInputShape):
            ServerListLoader(path).load(strict=True)

    def test_malformed_json(self, tmp_path):
        """Test malformed JSON propagates."""
        path = tmp_path / "servers.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            ServerListLoader(path).load()

    def test_unsupported_format(self, tmp_path):
        """Test unknown suffixes are rejected."""
        path = tmp_path / "servers.txt"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported file format"):
            ServerListLoader(path).load()

    def test_csv(self, tmp_path):
        """Test CSV rows become raw records with strings kept verbatim."""
        path = tmp_path / "servers.csv"
        path.write_text(
            "name,monthlyCost,expire\n"
            "hk,45,2026-12-31\n"
            "jp,¥128,\n",
            encoding="utf-8",
        )

        servers = ServerListLoader(path).load()

        assert servers == [
            {"name": "hk", "monthlyCost": "45", "expire": "2026-12-31"},
            {"name": "jp", "monthlyCost": "¥128", "expire": None},
        ]

    def test_csv_feeds_calculator(self, tmp_path):
        """Test loaded CSV records flow through the calculator."""
        path = tmp_path / "servers.csv"
        path.write_text("name,monthlyCost,expire\nhk,45,2026-12-31\nbad,10,soon\n", encoding="utf-8")

        result = compute_costs(ServerListLoader(path).load(), datetime(2026, 1, 1))

        assert result.active_servers == 1
        assert len(result.warnings) == 1
        assert "bad" in result.warnings[0]

    def test_excel_dates(self, tmp_path):
        """Test Excel date cells keep end-of-day semantics."""
        pytest.importorskip("openpyxl")
        path = tmp_path / "servers.xlsx"
        pd.DataFrame({
            "name": ["hk", "jp"],
            "monthlyCost": [45, 128],
            "expire": [pd.Timestamp("2026-12-31"), pd.Timestamp("2026-06-01 14:30")],
        }).to_excel(path, index=False)

        servers = ServerListLoader(path).load()

        assert servers[0]["expire"] == "2026-12-31"
        assert servers[1]["expire"] == "2026-06-01T14:30:00"
        assert servers[0]["monthlyCost"] == 45
