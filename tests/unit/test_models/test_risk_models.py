"""Tests for bottleneckiq.models.analysis and bottleneckiq.models.insight."""

import pytest
from pydantic import ValidationError

from bottleneckiq.models import (
    AggregateSummary,
    CostImpactTotals,
    Insight,
    InsightReport,
    InsightType,
    ProcessStatus,
    RiskAnalysis,
    RiskLevel,
    RiskThresholds,
)


class TestRiskThresholds:
    def test_defaults(self):
        t = RiskThresholds()
        assert (t.medium, t.high, t.critical) == (40, 60, 80)
        assert t.bottleneck_score == 60
        assert t.bottleneck_delay_pct == 20.0

    def test_rejects_unordered(self):
        with pytest.raises(ValidationError):
            RiskThresholds(medium=60, high=40, critical=80)

    def test_rejects_equal_bounds(self):
        with pytest.raises(ValidationError):
            RiskThresholds(medium=60, high=60, critical=80)

    def test_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            RiskThresholds(critical=120)


class TestRiskAnalysis:
    def _make(self, **overrides) -> RiskAnalysis:
        data = {
            "process_name": "Dispatch",
            "status": ProcessStatus.CRITICAL,
            "actual_duration": 1260,
            "average_duration": 720,
            "delay_percentage": 75.0,
            "delay_time": 540,
            "risk_score": 93,
            "risk_level": RiskLevel.CRITICAL,
            "is_potential_bottleneck": True,
        }
        data.update(overrides)
        return RiskAnalysis(**data)

    def test_valid(self):
        analysis = self._make()
        assert analysis.delay_minutes == 9.0
        assert analysis.message is None

    def test_rejects_score_above_100(self):
        with pytest.raises(ValidationError):
            self._make(risk_score=101)

    def test_rejects_negative_score(self):
        with pytest.raises(ValidationError):
            self._make(risk_score=-1)


class TestAggregateSummary:
    def test_defaults(self):
        summary = AggregateSummary()
        assert summary.total_processes == 0
        assert summary.most_problematic == "None"
        assert summary.risk_distribution.critical == 0


class TestCostImpactTotals:
    def test_empty(self):
        totals = CostImpactTotals()
        assert totals.bottleneck_count == 0
        assert totals.cost_per_month == 0.0


class TestInsight:
    def test_valid(self):
        insight = Insight(
            message="🔴 CRITICAL: Dispatch",
            process_name="Dispatch",
            delay_percentage=75,
            risk_score=93,
            type=InsightType.CRITICAL,
        )
        assert insight.ai_generated is False

    def test_rejects_empty_message(self):
        with pytest.raises(ValidationError):
            Insight(
                message="",
                process_name="Dispatch",
                delay_percentage=75,
                risk_score=93,
                type=InsightType.CRITICAL,
            )

    def test_type_from_string(self):
        insight = Insight(
            message="x", process_name="p", delay_percentage=0, risk_score=0, type="info"
        )
        assert insight.type is InsightType.INFO


class TestInsightReport:
    def test_ai_count(self):
        details = [
            Insight(
                message="a",
                process_name="A",
                delay_percentage=0,
                risk_score=90,
                type=InsightType.CRITICAL,
                ai_generated=True,
            ),
            Insight(
                message="b",
                process_name="B",
                delay_percentage=0,
                risk_score=50,
                type=InsightType.ATTENTION,
            ),
        ]
        report = InsightReport(count=2, threshold=20, messages=["a", "b"], details=details)
        assert report.ai_count == 1

    def test_rejects_threshold_out_of_range(self):
        with pytest.raises(ValidationError):
            InsightReport(threshold=150)
