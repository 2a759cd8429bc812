"""Shared fixtures for BottleneckIQ tests."""

from datetime import UTC, datetime, timedelta

import pytest

from bottleneckiq.analysis import analyze_observation, analyze_observations
from bottleneckiq.models import (
    InsightType,
    ProcessObservation,
    ProcessStatus,
    RiskAnalysis,
    RiskThresholds,
)

# Fixed "now" so window filtering is deterministic
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Observation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def critical_dispatch() -> ProcessObservation:
    """Dispatch running 21 min against a 12 min baseline, status critical."""
    return ProcessObservation(
        name="Dispatch",
        process_id="p-4",
        actual_duration=1260,
        average_duration=720,
        status=ProcessStatus.CRITICAL,
        timestamp=NOW - timedelta(minutes=30),
    )


@pytest.fixture
def early_receiving() -> ProcessObservation:
    """Receiving finished a minute early."""
    return ProcessObservation(
        name="Receiving",
        process_id="p-1",
        actual_duration=840,
        average_duration=900,
        status=ProcessStatus.COMPLETED,
        timestamp=NOW - timedelta(hours=2),
    )


@pytest.fixture
def zero_baseline() -> ProcessObservation:
    """New process with no baseline yet."""
    return ProcessObservation(
        name="Returns Intake",
        actual_duration=300,
        average_duration=0,
        status=ProcessStatus.IN_PROGRESS,
    )


@pytest.fixture
def warehouse_observations(
    critical_dispatch: ProcessObservation,
    early_receiving: ProcessObservation,
) -> list[ProcessObservation]:
    """Five warehouse steps, one of each interesting kind.

    Expected scores: Receiving 7, Quality Check 63, Material Picking 43,
    Dispatch 93, Packaging 58.
    """
    return [
        early_receiving,
        ProcessObservation(
            name="Quality Check",
            process_id="p-2",
            actual_duration=1020,
            average_duration=780,
            status=ProcessStatus.DELAYED,
            timestamp=NOW - timedelta(hours=5),
        ),
        ProcessObservation(
            name="Material Picking",
            process_id="p-3",
            actual_duration=1500,
            average_duration=1200,
            status=ProcessStatus.IN_PROGRESS,
            timestamp=NOW - timedelta(hours=20),
        ),
        critical_dispatch,
        ProcessObservation(
            name="Packaging",
            process_id="p-5",
            actual_duration=660,
            average_duration=600,
            status=ProcessStatus.FAILED,
            timestamp=NOW - timedelta(days=3),
        ),
    ]


# ---------------------------------------------------------------------------
# Analysis fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def thresholds() -> RiskThresholds:
    return RiskThresholds()


@pytest.fixture
def dispatch_analysis(
    critical_dispatch: ProcessObservation, thresholds: RiskThresholds
) -> RiskAnalysis:
    return analyze_observation(critical_dispatch, thresholds)


@pytest.fixture
def warehouse_analyses(
    warehouse_observations: list[ProcessObservation], thresholds: RiskThresholds
) -> list[RiskAnalysis]:
    return analyze_observations(warehouse_observations, thresholds)


# ---------------------------------------------------------------------------
# Enricher stubs
# ---------------------------------------------------------------------------


class StubEnricher:
    """Enricher returning a fixed message and recording its calls."""

    def __init__(self, message: str = "🔴 Add two pickers to the dock.") -> None:
        self.message = message
        self.calls: list[str] = []

    def enrich(self, analysis: RiskAnalysis, insight_type: InsightType) -> str:
        self.calls.append(analysis.process_name)
        return self.message


class FailingEnricher:
    """Enricher that always raises, like a provider outage."""

    def __init__(self) -> None:
        self.calls = 0

    def enrich(self, analysis: RiskAnalysis, insight_type: InsightType) -> str:
        self.calls += 1
        raise ConnectionError("provider unreachable")


@pytest.fixture
def stub_enricher() -> StubEnricher:
    return StubEnricher()


@pytest.fixture
def failing_enricher() -> FailingEnricher:
    return FailingEnricher()
