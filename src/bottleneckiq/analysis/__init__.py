"""BottleneckIQ analysis algorithms."""

from bottleneckiq.analysis.cost import estimate_cost_impact, estimate_total_cost_impact
from bottleneckiq.analysis.normalizer import from_seconds, to_seconds
from bottleneckiq.analysis.scenario import (
    IMPROVEMENT_SCENARIOS,
    apply_improvement,
    combine_improvements,
    get_scenario,
    project_scenarios,
)
from bottleneckiq.analysis.scoring import (
    analyze_observation,
    analyze_observations,
    analyze_records,
    calculate_delay_percentage,
    calculate_risk_score,
    classify_risk,
    is_bottleneck,
    is_bottleneck_combined,
    round_half_up,
    rounded_delay_percentage,
)
from bottleneckiq.analysis.stats import count_by_status, summarize_by_process
from bottleneckiq.analysis.summary import (
    compare_periods,
    format_risk_report,
    most_problematic,
    period_metrics,
    summarize,
)

__all__ = [
    "IMPROVEMENT_SCENARIOS",
    "analyze_observation",
    "analyze_observations",
    "analyze_records",
    "apply_improvement",
    "calculate_delay_percentage",
    "calculate_risk_score",
    "classify_risk",
    "combine_improvements",
    "compare_periods",
    "count_by_status",
    "estimate_cost_impact",
    "estimate_total_cost_impact",
    "format_risk_report",
    "from_seconds",
    "get_scenario",
    "is_bottleneck",
    "is_bottleneck_combined",
    "most_problematic",
    "period_metrics",
    "project_scenarios",
    "round_half_up",
    "rounded_delay_percentage",
    "summarize",
    "summarize_by_process",
    "to_seconds",
]
