"""Batch roll-up and plain-text reporting for risk analyses."""

import logging
from collections.abc import Sequence

from bottleneckiq.analysis.scoring import round_half_up
from bottleneckiq.models import (
    AggregateSummary,
    PeriodComparison,
    PeriodMetrics,
    RiskAnalysis,
    RiskDistribution,
    RiskLevel,
)

logger = logging.getLogger(__name__)

RISK_LEVEL_MARKERS: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "🔴",
    RiskLevel.HIGH: "🟠",
    RiskLevel.MEDIUM: "🟡",
    RiskLevel.LOW: "🟢",
}


def most_problematic(analyses: Sequence[RiskAnalysis]) -> RiskAnalysis | None:
    """Highest-scoring analysis; the earliest one wins ties."""
    top: RiskAnalysis | None = None
    for analysis in analyses:
        if top is None or analysis.risk_score > top.risk_score:
            top = analysis
    return top


def summarize(analyses: Sequence[RiskAnalysis]) -> AggregateSummary:
    """Compute roll-up statistics for a batch of analyses.

    Empty input yields zeroed counts and most_problematic == "None".
    """
    if not analyses:
        return AggregateSummary()

    bottlenecks = [a.process_name for a in analyses if a.is_potential_bottleneck]
    distribution = RiskDistribution(
        critical=sum(1 for a in analyses if a.risk_level == RiskLevel.CRITICAL),
        high=sum(1 for a in analyses if a.risk_level == RiskLevel.HIGH),
        medium=sum(1 for a in analyses if a.risk_level == RiskLevel.MEDIUM),
        low=sum(1 for a in analyses if a.risk_level == RiskLevel.LOW),
    )
    average_score = int(round_half_up(sum(a.risk_score for a in analyses) / len(analyses)))
    total_delay = sum(max(0.0, a.delay_time) for a in analyses)
    top = most_problematic(analyses)

    summary = AggregateSummary(
        total_processes=len(analyses),
        bottleneck_count=len(bottlenecks),
        bottlenecks=bottlenecks,
        risk_distribution=distribution,
        average_risk_score=average_score,
        total_delay=total_delay,
        most_problematic=top.process_name if top else "None",
    )

    logger.info(
        "Summary: %d processes, %d bottlenecks, average risk %d",
        summary.total_processes,
        summary.bottleneck_count,
        summary.average_risk_score,
    )
    return summary


def period_metrics(analyses: Sequence[RiskAnalysis]) -> PeriodMetrics:
    """Headline figures used to compare one period against another.

    The average delay covers bottlenecks only; the average risk covers
    every process. Empty input yields zeros.
    """
    bottlenecks = [a for a in analyses if a.is_potential_bottleneck]
    average_delay = sum(a.delay_percentage for a in bottlenecks) / (len(bottlenecks) or 1)
    average_risk = sum(a.risk_score for a in analyses) / (len(analyses) or 1)

    return PeriodMetrics(
        process_count=len(analyses),
        bottleneck_count=len(bottlenecks),
        average_delay_percentage=round_half_up(average_delay, 1),
        average_risk_score=int(round_half_up(average_risk)),
        critical_count=sum(1 for a in analyses if a.risk_level == RiskLevel.CRITICAL),
        high_count=sum(1 for a in analyses if a.risk_level == RiskLevel.HIGH),
    )


def compare_periods(
    current: Sequence[RiskAnalysis],
    previous: Sequence[RiskAnalysis],
) -> PeriodComparison:
    """Compare two periods' analyses; positive changes mean things got worse.

    Args:
        current: Analyses for the period of interest.
        previous: Analyses for the period to compare against.

    Returns:
        PeriodComparison with both periods' metrics and the differences.
    """
    now = period_metrics(current)
    before = period_metrics(previous)

    comparison = PeriodComparison(
        current=now,
        previous=before,
        bottleneck_change=now.bottleneck_count - before.bottleneck_count,
        average_delay_change=round_half_up(
            now.average_delay_percentage - before.average_delay_percentage, 1
        ),
        average_risk_change=now.average_risk_score - before.average_risk_score,
        critical_change=now.critical_count - before.critical_count,
    )

    logger.info(
        "Period comparison: bottlenecks %+d, average risk %+d (%s)",
        comparison.bottleneck_change,
        comparison.average_risk_change,
        comparison.trends["average_risk"].value,
    )
    return comparison


def format_risk_report(analyses: Sequence[RiskAnalysis]) -> str:
    """Render a multi-line plain-text report for console or log output."""
    summary = summarize(analyses)
    dist = summary.risk_distribution

    lines = [
        "=== Bottleneck Risk Analysis ===",
        "",
        f"Total Processes: {summary.total_processes}",
        f"Average Risk Score: {summary.average_risk_score}/100",
        f"Potential Bottlenecks: {summary.bottleneck_count}",
        f"Most Problematic: {summary.most_problematic}",
        f"Total Delay: {summary.total_delay:.1f}s",
        "",
        "=== Risk Distribution ===",
        f"{RISK_LEVEL_MARKERS[RiskLevel.CRITICAL]} Critical: {dist.critical}",
        f"{RISK_LEVEL_MARKERS[RiskLevel.HIGH]} High: {dist.high}",
        f"{RISK_LEVEL_MARKERS[RiskLevel.MEDIUM]} Medium: {dist.medium}",
        f"{RISK_LEVEL_MARKERS[RiskLevel.LOW]} Low: {dist.low}",
        "",
    ]

    if summary.bottlenecks:
        lines.append("=== Identified Bottlenecks ===")
        lines.extend(f"{i}. {name}" for i, name in enumerate(summary.bottlenecks, start=1))
        lines.append("")

    lines.append("=== Detailed Analysis ===")
    for i, a in enumerate(analyses, start=1):
        icon = "⚠️ " if a.is_potential_bottleneck else "  "
        lines.append(f"{icon}{i}. {a.process_name}")
        lines.append(f"   Risk Score: {a.risk_score}/100 ({a.risk_level.value})")
        lines.append(f"   Delay: {a.delay_percentage:.1f}%")
        lines.append(
            f"   Actual: {a.actual_duration:.1f}s vs Average: {a.average_duration:.1f}s"
        )
        if a.is_potential_bottleneck:
            lines.append("   ⚠️  POTENTIAL BOTTLENECK DETECTED")
        if a.message:
            lines.append(f"   Insight: {a.message}")
        lines.append("")

    return "\n".join(lines)
