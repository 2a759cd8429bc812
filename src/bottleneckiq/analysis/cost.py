"""Cost impact estimation for bottlenecks.

Pure algorithmic logic - no LLM calls. Turns a bottleneck's delay into an
estimated operational cost per day, week and month, with the assumptions
behind the number.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from bottleneckiq.analysis.scoring import round_half_up
from bottleneckiq.config import settings
from bottleneckiq.models import CostImpact, CostImpactTotals, RiskAnalysis

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30


@dataclass
class CostInputs:
    """Inputs for a cost impact calculation."""

    delay_minutes: float
    delay_percentage: float
    hourly_operation_cost: float
    orders_per_day: int


def estimate_cost_impact(
    analysis: RiskAnalysis,
    hourly_operation_cost: float | None = None,
    orders_per_day: int | None = None,
) -> CostImpact:
    """Estimate the cost of one process's delay.

    The share of daily orders affected equals the delay percentage (capped
    at 100%); each affected order costs the delay minutes at the
    per-minute operating rate. Processes finishing early cost nothing.

    Args:
        analysis: Risk analysis of the process.
        hourly_operation_cost: Operating cost per hour (defaults to settings).
        orders_per_day: Orders processed per day (defaults to settings).

    Returns:
        CostImpact with per-day/week/month figures and assumptions.
    """
    inputs = CostInputs(
        delay_minutes=max(0.0, analysis.delay_time / 60),
        delay_percentage=analysis.delay_percentage,
        hourly_operation_cost=(
            settings.hourly_operation_cost
            if hourly_operation_cost is None
            else hourly_operation_cost
        ),
        orders_per_day=settings.orders_per_day if orders_per_day is None else orders_per_day,
    )

    affected_share = min(max(inputs.delay_percentage, 0.0) / 100, 1.0)
    orders_affected = math.floor(inputs.orders_per_day * affected_share)
    cost_per_minute = inputs.hourly_operation_cost / 60
    cost_per_day = inputs.delay_minutes * cost_per_minute * orders_affected

    impact = CostImpact(
        process_name=analysis.process_name,
        delay_minutes=round_half_up(inputs.delay_minutes, 1),
        orders_affected=orders_affected,
        cost_per_day=round_half_up(cost_per_day),
        cost_per_week=round_half_up(cost_per_day * DAYS_PER_WEEK),
        cost_per_month=round_half_up(cost_per_day * DAYS_PER_MONTH),
        assumptions=_build_assumptions(inputs),
    )

    logger.debug(
        "Cost impact for %s: $%.0f/day (%d orders affected)",
        impact.process_name,
        impact.cost_per_day,
        impact.orders_affected,
    )
    return impact


def estimate_total_cost_impact(
    analyses: Sequence[RiskAnalysis],
    hourly_operation_cost: float | None = None,
    orders_per_day: int | None = None,
) -> CostImpactTotals:
    """Estimate cost impact for every flagged bottleneck and sum it."""
    items = [
        estimate_cost_impact(a, hourly_operation_cost, orders_per_day)
        for a in analyses
        if a.is_potential_bottleneck
    ]

    totals = CostImpactTotals(
        items=items,
        cost_per_day=sum(i.cost_per_day for i in items),
        cost_per_week=sum(i.cost_per_week for i in items),
        cost_per_month=sum(i.cost_per_month for i in items),
        orders_affected=sum(i.orders_affected for i in items),
    )

    logger.info(
        "Estimated cost impact: %d bottlenecks, $%.0f/day",
        totals.bottleneck_count,
        totals.cost_per_day,
    )
    return totals


def _build_assumptions(inputs: CostInputs) -> list[str]:
    """Build list of assumptions for the cost estimate."""
    assumptions = [
        f"Operating cost: ${inputs.hourly_operation_cost:,.0f} per hour",
        f"Throughput: {inputs.orders_per_day:,} orders per day",
    ]
    if inputs.delay_minutes > 0:
        assumptions.append(
            f"Orders affected scale with the delay ({min(max(inputs.delay_percentage, 0.0), 100.0):.0f}% of daily orders)"
        )
    else:
        assumptions.append("Process is on or ahead of schedule; no delay cost")
    return assumptions
