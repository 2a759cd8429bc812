"""What-if projections for bottleneck improvement scenarios.

Pure algorithmic logic - no LLM calls. A scenario cuts the actual duration
of every current bottleneck by a percentage. Stacked scenarios combine
with diminishing returns. The projection reports the headline delay,
savings and ROI figures, then re-scores the improved observations to show
the change in risk, bottleneck count and daily cost.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from bottleneckiq.analysis.cost import DAYS_PER_MONTH, estimate_total_cost_impact
from bottleneckiq.analysis.scoring import analyze_observations, round_half_up
from bottleneckiq.analysis.summary import period_metrics
from bottleneckiq.config import settings
from bottleneckiq.models import (
    ImprovementScenario,
    ProcessObservation,
    RiskThresholds,
    ScenarioProjection,
)

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 8
MONTHS_PER_YEAR = 12

IMPROVEMENT_SCENARIOS: list[ImprovementScenario] = [
    ImprovementScenario(
        name="Add 2 Staff Members", improvement_pct=25, cost=8000, timeframe_weeks=1
    ),
    ImprovementScenario(
        name="Upgrade Equipment", improvement_pct=35, cost=25000, timeframe_weeks=4
    ),
    ImprovementScenario(
        name="Process Optimization", improvement_pct=20, cost=5000, timeframe_weeks=2
    ),
    ImprovementScenario(
        name="Automation System", improvement_pct=50, cost=75000, timeframe_weeks=12
    ),
    ImprovementScenario(
        name="Staff Training", improvement_pct=15, cost=3000, timeframe_weeks=3
    ),
]

NO_BOTTLENECKS_MESSAGE = "No bottlenecks detected. System running efficiently! ✅"


@dataclass
class SavingsInputs:
    """Inputs for the savings and ROI figures."""

    delay_reduction: float
    hourly_operation_cost: float
    total_cost: float


def get_scenario(name: str) -> ImprovementScenario:
    """Look up a preset scenario by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name.
    """
    for scenario in IMPROVEMENT_SCENARIOS:
        if scenario.name.lower() == name.strip().lower():
            return scenario
    raise KeyError(name)


def combine_improvements(scenarios: Sequence[ImprovementScenario]) -> float:
    """Stack scenario improvements; each acts on what the previous ones left.

    25% then 20% gives 25 + 20 * 0.75 = 40%, not 45%.
    """
    improvement = 0.0
    for scenario in scenarios:
        improvement += scenario.improvement_pct * (1 - improvement / 100)
    return improvement


def apply_improvement(
    observation: ProcessObservation, improvement_pct: float
) -> ProcessObservation:
    """Copy of the observation with its actual duration cut by improvement_pct.

    The result never drops below the baseline: an improvement removes delay,
    it does not make the step finish early.
    """
    improved = observation.actual_duration * (1 - improvement_pct / 100)
    floor = min(observation.actual_duration, observation.average_duration)
    return observation.model_copy(update={"actual_duration": max(improved, floor)})


def project_scenarios(
    observations: Sequence[ProcessObservation],
    scenarios: Sequence[ImprovementScenario],
    thresholds: RiskThresholds | None = None,
    hourly_operation_cost: float | None = None,
    orders_per_day: int | None = None,
) -> ScenarioProjection:
    """Project the effect of applying scenarios to the current bottlenecks.

    Args:
        observations: Observations for the period being planned for.
        scenarios: Interventions to apply together.
        thresholds: Threshold set for scoring (defaults to settings).
        hourly_operation_cost: Operating cost per hour (defaults to settings).
        orders_per_day: Orders processed per day (defaults to settings).

    Returns:
        ScenarioProjection with before/after figures. When nothing is a
        bottleneck only the scenario totals are filled in.
    """
    hourly_operation_cost = (
        settings.hourly_operation_cost if hourly_operation_cost is None else hourly_operation_cost
    )
    improvement = combine_improvements(scenarios)
    total_cost = sum(s.cost for s in scenarios)
    timeframe = max((s.timeframe_weeks for s in scenarios), default=None)

    logger.info(
        "Projecting %d scenario(s): %.1f%% combined improvement, $%.0f cost",
        len(scenarios),
        improvement,
        total_cost,
    )

    current = analyze_observations(observations, thresholds)
    before = period_metrics(current)

    projection = ScenarioProjection(
        scenarios=[s.name for s in scenarios],
        combined_improvement_pct=round_half_up(improvement),
        total_cost=total_cost,
        timeframe_weeks=timeframe,
        current_average_risk=before.average_risk_score,
        projected_average_risk=before.average_risk_score,
    )
    if not before.bottleneck_count:
        logger.info("No bottlenecks to improve")
        return projection

    current_delay = int(round_half_up(before.average_delay_percentage))
    projected_delay = max(0.0, current_delay - improvement)
    reduction = current_delay - projected_delay
    savings = SavingsInputs(
        delay_reduction=reduction,
        hourly_operation_cost=hourly_operation_cost,
        total_cost=total_cost,
    )
    monthly_savings = _monthly_savings(savings)

    # Every run of a bottlenecked process is improved; other processes are untouched
    bottleneck_names = {a.process_name for a in current if a.is_potential_bottleneck}
    improved_observations = [
        apply_improvement(o, improvement) if o.name in bottleneck_names else o
        for o in observations
    ]
    projected = analyze_observations(improved_observations, thresholds)
    after = period_metrics(projected)

    projection = projection.model_copy(
        update={
            "current_average_delay": current_delay,
            "projected_average_delay": int(round_half_up(projected_delay)),
            "delay_reduction": int(round_half_up(reduction)),
            "monthly_savings": monthly_savings,
            "annual_roi": _annual_roi(monthly_savings, savings),
            "projected_average_risk": after.average_risk_score,
            "current_bottleneck_count": before.bottleneck_count,
            "projected_bottleneck_count": after.bottleneck_count,
            "current_cost_per_day": estimate_total_cost_impact(
                current, hourly_operation_cost, orders_per_day
            ).cost_per_day,
            "projected_cost_per_day": estimate_total_cost_impact(
                projected, hourly_operation_cost, orders_per_day
            ).cost_per_day,
        }
    )

    logger.debug(
        "Scenario projection: delay %d%% -> %d%%, risk %d -> %d, bottlenecks %d -> %d",
        projection.current_average_delay,
        projection.projected_average_delay,
        projection.current_average_risk,
        projection.projected_average_risk,
        projection.current_bottleneck_count,
        projection.projected_bottleneck_count,
    )
    return projection


def _monthly_savings(inputs: SavingsInputs) -> float:
    """Operating cost recovered per month by the delay reduction."""
    hours_per_month = HOURS_PER_DAY * DAYS_PER_MONTH
    return round_half_up(
        inputs.delay_reduction / 100 * inputs.hourly_operation_cost * hours_per_month
    )


def _annual_roi(monthly_savings: float, inputs: SavingsInputs) -> int:
    """First-year return on the implementation cost, in percent."""
    if inputs.total_cost <= 0:
        return 0
    annual_savings = monthly_savings * MONTHS_PER_YEAR
    return int(round_half_up((annual_savings - inputs.total_cost) / inputs.total_cost * 100))
