"""BottleneckIQ domain models."""

from bottleneckiq.models.analysis import (
    AggregateSummary,
    CostImpact,
    CostImpactTotals,
    ImprovementScenario,
    PeriodComparison,
    PeriodMetrics,
    ProcessRunStats,
    RiskAnalysis,
    RiskDistribution,
    RiskLevel,
    RiskThresholds,
    ScenarioProjection,
    Trend,
)
from bottleneckiq.models.insight import Insight, InsightReport, InsightType
from bottleneckiq.models.observation import (
    DurationUnit,
    ProcessObservation,
    ProcessStatus,
    parse_status,
)

__all__ = [
    # Analysis
    "AggregateSummary",
    "CostImpact",
    "CostImpactTotals",
    # Observation
    "DurationUnit",
    "ImprovementScenario",
    # Insight
    "Insight",
    "InsightReport",
    "InsightType",
    "PeriodComparison",
    "PeriodMetrics",
    "ProcessObservation",
    "ProcessRunStats",
    "ProcessStatus",
    "RiskAnalysis",
    "RiskDistribution",
    "RiskLevel",
    "RiskThresholds",
    "ScenarioProjection",
    "Trend",
    "parse_status",
]
