"""Tests for bottleneckiq.cli."""

import pytest

from bottleneckiq import cli
from bottleneckiq.analysis.scenario import NO_BOTTLENECKS_MESSAGE
from bottleneckiq.insights.templates import NO_DATA_MESSAGE

STEPS_CSV = """name,actual_duration,average_duration,status,timestamp
Receiving,840,900,completed,2020-01-01T08:00:00Z
Quality Check,1020,780,delayed,2020-01-01T09:00:00Z
Dispatch,1260,720,critical,2020-01-01T10:00:00Z
"""


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    # Keep the app logger propagating so other tests can use caplog
    monkeypatch.setattr(cli, "setup_logging", lambda level="INFO": None)


@pytest.fixture
def steps_csv(tmp_path):
    path = tmp_path / "steps.csv"
    path.write_text(STEPS_CSV, encoding="utf-8")
    return path


class TestBuildParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args(["steps.csv"])
        assert args.unit == "seconds"
        assert args.window is None
        assert args.no_ai is False

    def test_rejects_unknown_unit(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["steps.csv", "--unit", "hours"])


class TestMain:
    def test_report_and_insights(self, steps_csv, capsys):
        exit_code = cli.main([str(steps_csv), "--no-ai"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "=== Bottleneck Risk Analysis ===" in out
        assert "Most Problematic: Dispatch" in out
        assert "=== Insights ===" in out
        assert "🔴 CRITICAL: Dispatch severely delayed by 9 minutes (75.0%)" in out
        assert "📊 WARNING: Quality Check showing 31.0% delay" in out

    def test_cost_section(self, steps_csv, capsys):
        cli.main([str(steps_csv), "--no-ai", "--cost"])
        out = capsys.readouterr().out

        assert "=== Cost Impact ===" in out
        assert "Dispatch: $" in out
        assert "Total: $" in out

    def test_window_with_no_recent_data(self, steps_csv, capsys):
        exit_code = cli.main([str(steps_csv), "--no-ai", "--window", "1h"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert NO_DATA_MESSAGE in out

    def test_name_filter(self, steps_csv, capsys):
        cli.main([str(steps_csv), "--no-ai", "--name", "Receiving"])
        out = capsys.readouterr().out

        assert "Total Processes: 1" in out
        assert "All processes operating normally" in out

    def test_missing_file(self, tmp_path, capsys):
        exit_code = cli.main([str(tmp_path / "missing.csv"), "--no-ai"])
        err = capsys.readouterr().err

        assert exit_code == 1
        assert "missing.csv" in err

    def test_bad_window(self, steps_csv, capsys):
        exit_code = cli.main([str(steps_csv), "--no-ai", "--window", "forever"])

        assert exit_code == 1
        assert "Time window must be one of" in capsys.readouterr().err

    def test_period_comparison(self, steps_csv, capsys):
        # The 2020 timestamps fall outside the 7-day window, so that period is empty
        exit_code = cli.main([str(steps_csv), "--no-ai", "--compare", "7d"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "=== Period Comparison (vs 7d) ===" in out
        assert "Bottlenecks: 2 vs 0 (+2, Worsening)" in out
        assert "Avg Risk Score: 54 vs 0 (+54, Worsening)" in out

    def test_scenario_projection(self, steps_csv, capsys):
        exit_code = cli.main([str(steps_csv), "--no-ai", "--scenario", "Add 2 Staff Members"])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert "=== Scenario Projection: Add 2 Staff Members ===" in out
        assert "Avg Delay: 53% -> 28%" in out
        assert "Bottlenecks: 2 -> 1" in out
        assert "Monthly Savings: $30,000" in out
        assert "Annual ROI: 4400%" in out

    def test_scenario_without_bottlenecks(self, steps_csv, capsys):
        cli.main(
            [str(steps_csv), "--no-ai", "--name", "Receiving", "--scenario", "Staff Training"]
        )
        out = capsys.readouterr().out

        assert NO_BOTTLENECKS_MESSAGE in out

    def test_unknown_scenario_rejected(self, steps_csv):
        with pytest.raises(SystemExit):
            cli.main([str(steps_csv), "--scenario", "Hire a Wizard"])
