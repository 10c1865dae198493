import csv
import json

import click
import pytest
from click.testing import CliRunner

from loan_amortizer.main import INVALID_INPUT_MESSAGE, cli, parse_amount


@pytest.fixture
def runner():
    return CliRunner()


class TestParseAmount:
    @pytest.mark.parametrize(
        "value, expected",
        [("250000", "250000"), ("250,000", "250000"), ("250k", "250000"), ("1.5m", "1500000.0")],
    )
    def test_parse(self, value, expected):
        assert parse_amount(value) == expected

    def test_invalid(self):
        with pytest.raises(click.BadParameter):
            parse_amount("lots")


class TestSummaryCommand:
    def test_prints_summary(self, runner):
        result = runner.invoke(cli, ["summary", "-p", "250k", "-r", "4.5", "-t", "360"])
        assert result.exit_code == 0
        assert "$1,266.71" in result.output

    def test_invalid_input(self, runner):
        result = runner.invoke(cli, ["summary", "-p", "0", "-r", "4.5", "-t", "360"])
        assert result.exit_code == 1
        assert INVALID_INPUT_MESSAGE in result.output

    def test_bad_amount(self, runner):
        result = runner.invoke(cli, ["summary", "-p", "lots", "-r", "4.5", "-t", "360"])
        assert result.exit_code == 2

    def test_json_export(self, runner, tmp_path):
        path = tmp_path / "summary.json"
        result = runner.invoke(cli, ["summary", "-p", "1000", "-r", "12", "-t", "1", "--output", str(path)])
        assert result.exit_code == 0
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"monthly_payment": 1010.0, "total_interest": 10.0, "total_amount": 1010.0}

    def test_rejects_csv(self, runner, tmp_path):
        path = tmp_path / "summary.csv"
        result = runner.invoke(cli, ["summary", "-p", "1000", "-r", "12", "-t", "1", "--output", str(path)])
        assert result.exit_code == 2
        assert not path.exists()


class TestScheduleCommand:
    def test_truncates_long_schedules(self, runner):
        result = runner.invoke(cli, ["schedule", "-p", "250000", "-r", "4.5", "-t", "360", "--max-rows", "12"])
        assert result.exit_code == 0
        assert "Schedule has 360 rows; showing first 12 rows." in result.output
        assert "\n12\t" in result.output
        assert "\n13\t" not in result.output

    def test_all_rows(self, runner):
        result = runner.invoke(cli, ["schedule", "-p", "10000", "-r", "0", "-t", "12", "--max-rows", "0"])
        assert result.exit_code == 0
        assert "\n12\t$833.33\t$833.33\t$0.00\t$0.00" in result.output

    def test_csv_export(self, runner, tmp_path):
        path = tmp_path / "schedule.csv"
        result = runner.invoke(cli, ["schedule", "-p", "250000", "-r", "4.5", "-t", "360", "--output", str(path)])
        assert result.exit_code == 0
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["Month", "Payment", "Principal", "Interest", "Balance"]
        assert len(rows) == 361
        assert float(rows[-1][4]) == 0.0

    def test_json_export(self, runner, tmp_path):
        path = tmp_path / "schedule.json"
        result = runner.invoke(cli, ["schedule", "-p", "250000", "-r", "4.5", "-t", "360", "--output", str(path)])
        assert result.exit_code == 0
        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data["schedule"]) == 360
        assert data["schedule"][0]["month"] == 1

    def test_unsupported_format(self, runner, tmp_path):
        path = tmp_path / "schedule.txt"
        result = runner.invoke(cli, ["schedule", "-p", "1000", "-r", "12", "-t", "1", "--output", str(path)])
        assert result.exit_code == 2
