"""BottleneckIQ command line entry point.

Scores a CSV export of process observations and prints the risk report
followed by the bottleneck insights.

Usage:
    bottleneckiq process_steps.csv --window last24Hours --threshold 20
    bottleneckiq steps.csv --unit milliseconds --no-ai
    bottleneckiq steps.csv --window 1h --compare 24h
    bottleneckiq steps.csv --scenario "Add 2 Staff Members" --scenario "Staff Training"
"""

import argparse
import logging
import sys

from bottleneckiq.analysis import (
    IMPROVEMENT_SCENARIOS,
    analyze_observations,
    compare_periods,
    estimate_total_cost_impact,
    format_risk_report,
    get_scenario,
    project_scenarios,
)
from bottleneckiq.analysis.scenario import NO_BOTTLENECKS_MESSAGE
from bottleneckiq.config import settings
from bottleneckiq.exceptions import BottleneckIQError
from bottleneckiq.ingestion import TimeWindow, filter_observations, load_observations_csv
from bottleneckiq.insights import generate_insights, get_default_enricher
from bottleneckiq.logging_config import setup_logging
from bottleneckiq.models import DurationUnit, PeriodComparison, ScenarioProjection

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bottleneckiq",
        description="Score warehouse process timings and report bottlenecks.",
    )
    parser.add_argument("csv", help="CSV file with process observations")
    parser.add_argument(
        "--unit",
        choices=[u.value for u in DurationUnit],
        default=DurationUnit.SECONDS.value,
        help="Unit of the duration columns (default: seconds)",
    )
    parser.add_argument(
        "--window",
        help="Time window: last1Hour, last6Hours, last24Hours, last7Days (or 1h/6h/24h/7d)",
    )
    parser.add_argument("--status", help="Only observations with this status")
    parser.add_argument("--name", help="Only observations of this process")
    parser.add_argument(
        "--threshold",
        type=int,
        default=settings.insight_threshold,
        help="Minimum risk score for an insight (default: %(default)s)",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Use rule-based insight messages only",
    )
    parser.add_argument(
        "--cost",
        action="store_true",
        help="Also print the estimated cost impact of bottlenecks",
    )
    parser.add_argument(
        "--compare",
        metavar="WINDOW",
        help="Compare the selected window against this time window",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        default=[],
        choices=[s.name for s in IMPROVEMENT_SCENARIOS],
        help="Project the effect of an improvement scenario (repeatable)",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def format_comparison(comparison: PeriodComparison, previous_label: str) -> str:
    current, previous = comparison.current, comparison.previous
    trends = comparison.trends
    return "\n".join(
        [
            f"=== Period Comparison (vs {previous_label}) ===",
            f"Bottlenecks: {current.bottleneck_count} vs {previous.bottleneck_count} "
            f"({comparison.bottleneck_change:+d}, {trends['bottlenecks'].value})",
            f"Avg Delay: {current.average_delay_percentage:.1f}% vs "
            f"{previous.average_delay_percentage:.1f}% "
            f"({comparison.average_delay_change:+.1f}, {trends['average_delay'].value})",
            f"Avg Risk Score: {current.average_risk_score} vs {previous.average_risk_score} "
            f"({comparison.average_risk_change:+d}, {trends['average_risk'].value})",
            f"Critical: {current.critical_count} vs {previous.critical_count} "
            f"({comparison.critical_change:+d}, {trends['critical'].value})",
        ]
    )


def format_projection(projection: ScenarioProjection) -> str:
    lines = [f"=== Scenario Projection: {', '.join(projection.scenarios)} ==="]
    if not projection.has_bottlenecks:
        lines.append(NO_BOTTLENECKS_MESSAGE)
        return "\n".join(lines)

    lines.extend(
        [
            f"Combined Improvement: {projection.combined_improvement_pct:.0f}%",
            f"Avg Delay: {projection.current_average_delay}% -> "
            f"{projection.projected_average_delay}%",
            f"Avg Risk Score: {projection.current_average_risk} -> "
            f"{projection.projected_average_risk}",
            f"Bottlenecks: {projection.current_bottleneck_count} -> "
            f"{projection.projected_bottleneck_count}",
            f"Cost Impact: ${projection.current_cost_per_day:,.0f}/day -> "
            f"${projection.projected_cost_per_day:,.0f}/day",
            f"Investment: ${projection.total_cost:,.0f} over {projection.timeframe_weeks} weeks",
            f"Monthly Savings: ${projection.monthly_savings:,.0f}",
            f"Annual ROI: {projection.annual_roi}%",
        ]
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        loaded = load_observations_csv(args.csv, unit=args.unit)
        window = TimeWindow.parse(args.window) if args.window else None
        observations = filter_observations(
            loaded, window=window, status=args.status, name=args.name
        )

        analyses = analyze_observations(observations)
        enricher = None if args.no_ai else get_default_enricher()
        report = generate_insights(analyses, threshold=args.threshold, enricher=enricher)

        comparison = None
        if args.compare:
            previous = filter_observations(
                loaded,
                window=TimeWindow.parse(args.compare),
                status=args.status,
                name=args.name,
            )
            comparison = compare_periods(analyses, analyze_observations(previous))

        projection = None
        if args.scenario:
            scenarios = [get_scenario(name) for name in args.scenario]
            projection = project_scenarios(observations, scenarios)
    except BottleneckIQError as e:
        logger.error("Run failed: %s", e)
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1

    print(format_risk_report(analyses))
    print("=== Insights ===")
    for message in report.messages:
        print(message)

    if args.cost:
        totals = estimate_total_cost_impact(analyses)
        print()
        print("=== Cost Impact ===")
        for item in totals.items:
            print(
                f"{item.process_name}: ${item.cost_per_day:,.0f}/day, "
                f"${item.cost_per_month:,.0f}/month ({item.orders_affected} orders affected)"
            )
        print(f"Total: ${totals.cost_per_day:,.0f}/day, ${totals.cost_per_month:,.0f}/month")

    if comparison is not None:
        print()
        print(format_comparison(comparison, args.compare))

    if projection is not None:
        print()
        print(format_projection(projection))

    return 0


if __name__ == "__main__":
    sys.exit(main())
