# tests/test_cli.py
import csv
import json

import pytest
from click.testing import CliRunner

from emi_calc.main import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_schedule_prints_summary_and_rows(runner):
    result = runner.invoke(cli, ["schedule", "-p", "100k", "-r", "12", "-t", "12"])
    assert result.exit_code == 0, result.output
    assert "Monthly EMI        : 8884.88" in result.output
    assert "Months             : 12" in result.output
    assert result.output.count("\n12\t1\t") == 1


def test_schedule_with_years_and_overrides(runner):
    result = runner.invoke(
        cli,
        ["schedule", "-p", "500k", "-r", "8.5", "-y", "2", "--hike", "5",
         "--prepayment", "6:50k", "--rate-change", "13:9.5"],
    )
    assert result.exit_code == 0, result.output
    assert "Total prepayment   : 50000.00" in result.output


def test_schedule_truncates_long_output(runner):
    result = runner.invoke(cli, ["schedule", "-p", "1m", "-r", "9", "-y", "20"])
    assert result.exit_code == 0
    assert "Schedule has 240 rows; showing first 120 rows." in result.output


def test_term_and_years_are_exclusive(runner):
    result = runner.invoke(cli, ["schedule", "-p", "100k", "-r", "12", "-t", "12", "-y", "1"])
    assert result.exit_code == 2
    assert "exactly one of --term" in result.output


def test_invalid_input_is_a_usage_error(runner):
    result = runner.invoke(cli, ["schedule", "-p", "100k", "-r", "0", "-t", "12"])
    assert result.exit_code == 2
    assert "Interest rate must be greater than 0" in result.output


def test_bad_prepayment_entry(runner):
    result = runner.invoke(cli, ["schedule", "-p", "100k", "-r", "12", "-t", "12", "--prepayment", "abc"])
    assert result.exit_code == 2
    assert "MONTH:VALUE" in result.output


def test_export_json(runner, tmp_path):
    out = tmp_path / "schedule.json"
    result = runner.invoke(cli, ["schedule", "-p", "100000", "-r", "12", "-t", "12", "--output", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["months"] == 12
    assert len(data["schedule"]) == 12
    assert data["schedule"][0]["emi"] == 8884.88
    assert data["schedule"][-1]["balance"] == 0


def test_export_csv(runner, tmp_path):
    out = tmp_path / "schedule.csv"
    result = runner.invoke(cli, ["schedule", "-p", "100000", "-r", "12", "-t", "12", "--output", str(out)])
    assert result.exit_code == 0
    with out.open(encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "Month"
    assert len(rows) == 13


def test_export_rejects_unknown_suffix(runner, tmp_path):
    out = tmp_path / "schedule.txt"
    result = runner.invoke(cli, ["schedule", "-p", "100000", "-r", "12", "-t", "12", "--output", str(out)])
    assert result.exit_code == 2


def test_summary_json(runner, tmp_path):
    out = tmp_path / "summary.json"
    result = runner.invoke(cli, ["summary", "-p", "100000", "-r", "12", "-t", "12", "--output", str(out)])
    assert result.exit_code == 0
    summary = json.loads(out.read_text(encoding="utf-8"))["summary"]
    assert summary["paid_off"] is True
    assert summary["monthly_emi"] == pytest.approx(8884.88, abs=0.01)


def test_compare(runner):
    result = runner.invoke(cli, ["compare", "-p", "100000", "-r", "12", "-t", "12", "--prepayment", "1:50000"])
    assert result.exit_code == 0, result.output
    assert "Interest saved" in result.output
    months_line = next(line for line in result.output.splitlines() if line.startswith("Months saved"))
    assert int(months_line.split()[-1]) > 0


def test_borrowing(runner):
    result = runner.invoke(
        cli,
        ["borrowing", "--amount", "60000", "--years", "1", "--emi", "5000",
         "--paid", "1", "--paid", "2", "--start-date", "2026-01-31"],
    )
    assert result.exit_code == 0, result.output
    assert "2/12 months (17%)" in result.output
    assert "Last EMI           : 2026-12" in result.output


def test_borrowing_validation(runner):
    result = runner.invoke(cli, ["borrowing", "--amount", "100000", "--years", "1", "--emi", "5000"])
    assert result.exit_code == 2
    assert "too low" in result.output


def test_goal(runner):
    result = runner.invoke(
        cli,
        ["goal", "--target", "120k", "--balance", "30k", "--target-date", "2026-12-31",
         "--contribution", "2025-08-01:10k", "--contribution", "2025-09-01:10k",
         "--contribution", "2025-10-01:10k", "--today", "2026-01-01"],
    )
    assert result.exit_code == 0, result.output
    assert "Status             : active" in result.output
    assert "Progress           : 25%" in result.output
    assert "Recommended        : 8182" in result.output


def test_goal_balance_defaults_to_contributions(runner):
    result = runner.invoke(
        cli,
        ["goal", "--target", "120k", "--target-date", "2026-12-31",
         "--contribution", "2025-08-01:10k", "--contribution", "2025-09-01:10k",
         "--contribution", "2025-10-01:10k", "--today", "2026-01-01"],
    )
    assert result.exit_code == 0, result.output
    assert "Status             : active" in result.output
    assert "Progress           : 25%" in result.output


def test_goal_explicit_balance_overrides_contributions(runner):
    result = runner.invoke(
        cli,
        ["goal", "--target", "120k", "--balance", "60k", "--target-date", "2026-12-31",
         "--contribution", "2025-08-01:10k", "--today", "2026-01-01"],
    )
    assert result.exit_code == 0, result.output
    assert "Progress           : 50%" in result.output


def test_goal_bad_contribution(runner):
    result = runner.invoke(
        cli, ["goal", "--target", "1000", "--target-date", "2026-12-31", "--contribution", "yesterday"]
    )
    assert result.exit_code == 2
