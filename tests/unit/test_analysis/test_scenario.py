"""Tests for bottleneckiq.analysis.scenario."""

import pytest

from bottleneckiq.analysis.cost import estimate_total_cost_impact
from bottleneckiq.analysis.scenario import (
    IMPROVEMENT_SCENARIOS,
    apply_improvement,
    combine_improvements,
    get_scenario,
    project_scenarios,
)
from bottleneckiq.models import ImprovementScenario

COSTS = {"hourly_operation_cost": 500, "orders_per_day": 1000}


@pytest.fixture
def add_staff() -> ImprovementScenario:
    return get_scenario("Add 2 Staff Members")


@pytest.fixture
def optimization() -> ImprovementScenario:
    return get_scenario("Process Optimization")


class TestPresets:
    def test_five_presets(self):
        assert [s.name for s in IMPROVEMENT_SCENARIOS] == [
            "Add 2 Staff Members",
            "Upgrade Equipment",
            "Process Optimization",
            "Automation System",
            "Staff Training",
        ]

    def test_lookup_ignores_case(self):
        scenario = get_scenario("staff training")
        assert scenario.improvement_pct == 15
        assert scenario.cost == 3000
        assert scenario.timeframe_weeks == 3

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            get_scenario("Hire a Wizard")


class TestCombineImprovements:
    def test_none(self):
        assert combine_improvements([]) == 0.0

    def test_single(self, add_staff):
        assert combine_improvements([add_staff]) == 25.0

    def test_diminishing_returns(self, add_staff, optimization):
        # 25 + 20 * (1 - 0.25)
        assert combine_improvements([add_staff, optimization]) == pytest.approx(40.0)

    def test_never_exceeds_100(self):
        assert combine_improvements(IMPROVEMENT_SCENARIOS) < 100


class TestApplyImprovement:
    def test_cuts_actual_duration(self, critical_dispatch):
        improved = apply_improvement(critical_dispatch, 25)

        assert improved.actual_duration == 945.0
        assert improved.average_duration == 720
        assert improved.status is critical_dispatch.status

    def test_does_not_go_below_baseline(self, critical_dispatch):
        assert apply_improvement(critical_dispatch, 50).actual_duration == 720

    def test_early_finish_unchanged(self, early_receiving):
        assert apply_improvement(early_receiving, 25).actual_duration == 840

    def test_returns_copy(self, critical_dispatch):
        apply_improvement(critical_dispatch, 25)
        assert critical_dispatch.actual_duration == 1260


class TestProjectScenarios:
    def test_single_scenario(self, warehouse_observations, thresholds, add_staff):
        projection = project_scenarios(warehouse_observations, [add_staff], thresholds, **COSTS)

        assert projection.scenarios == ["Add 2 Staff Members"]
        assert projection.combined_improvement_pct == 25
        assert projection.total_cost == 8000
        assert projection.timeframe_weeks == 1
        # Bottlenecks: Quality Check 30.8% and Dispatch 75.0%
        assert projection.current_average_delay == 53
        assert projection.projected_average_delay == 28
        assert projection.delay_reduction == 25
        assert projection.monthly_savings == 30000
        assert projection.annual_roi == 4400

    def test_rescores_improved_bottlenecks(self, warehouse_observations, thresholds, add_staff):
        projection = project_scenarios(warehouse_observations, [add_staff], thresholds, **COSTS)

        # Quality Check drops to its baseline (20); Dispatch to 945 s (83)
        assert projection.current_average_risk == 53
        assert projection.projected_average_risk == 42
        assert projection.current_bottleneck_count == 2
        assert projection.projected_bottleneck_count == 1

    def test_cost_before_and_after(
        self, warehouse_observations, warehouse_analyses, thresholds, add_staff
    ):
        projection = project_scenarios(warehouse_observations, [add_staff], thresholds, **COSTS)

        current = estimate_total_cost_impact(warehouse_analyses, **COSTS)
        assert projection.current_cost_per_day == current.cost_per_day
        assert 0 < projection.projected_cost_per_day < projection.current_cost_per_day

    def test_combined_scenarios(self, warehouse_observations, thresholds, add_staff, optimization):
        projection = project_scenarios(
            warehouse_observations, [add_staff, optimization], thresholds, **COSTS
        )

        assert projection.combined_improvement_pct == 40
        assert projection.total_cost == 13000
        assert projection.timeframe_weeks == 2
        assert projection.projected_average_delay == 13
        assert projection.monthly_savings == 48000
        # (48000 * 12 - 13000) / 13000 * 100 = 4330.8
        assert projection.annual_roi == 4331

    def test_large_improvement_on_large_delay(self, critical_dispatch, thresholds):
        automation = get_scenario("Automation System")
        upgrade = get_scenario("Upgrade Equipment")
        projection = project_scenarios(
            [critical_dispatch], [automation, upgrade], thresholds, **COSTS
        )

        # 50 + 35 * 0.5 = 67.5 points off a 75% delay
        assert projection.current_average_delay == 75
        assert projection.projected_average_delay == 8
        assert projection.delay_reduction == 68

    def test_delay_floor_at_zero(self, warehouse_observations, thresholds):
        quality_check = warehouse_observations[1]
        automation = get_scenario("Automation System")
        projection = project_scenarios([quality_check], [automation], thresholds, **COSTS)

        assert projection.current_average_delay == 31
        assert projection.projected_average_delay == 0
        assert projection.delay_reduction == 31
        assert projection.projected_bottleneck_count == 0

    def test_no_scenarios(self, warehouse_observations, thresholds):
        projection = project_scenarios(warehouse_observations, [], thresholds, **COSTS)

        assert projection.timeframe_weeks is None
        assert projection.projected_average_delay == projection.current_average_delay
        assert projection.monthly_savings == 0
        assert projection.annual_roi == 0
        assert projection.projected_average_risk == projection.current_average_risk
        assert projection.projected_bottleneck_count == 2

    def test_no_bottlenecks(self, early_receiving, thresholds, add_staff):
        projection = project_scenarios([early_receiving], [add_staff], thresholds, **COSTS)

        assert projection.has_bottlenecks is False
        assert projection.total_cost == 8000
        assert projection.current_average_risk == 7
        assert projection.annual_roi == 0
        assert projection.current_cost_per_day == 0

    def test_empty_input(self, thresholds, add_staff):
        projection = project_scenarios([], [add_staff], thresholds, **COSTS)
        assert projection.has_bottlenecks is False
