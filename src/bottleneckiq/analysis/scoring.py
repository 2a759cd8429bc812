"""Rule-based risk scoring for process observations.

Pure algorithmic logic - no LLM calls. A risk score is the sum of three
capped components:

    delay percentage   0-50 points
    process status     0-40 points
    delay in minutes   0-10 points

rounded half-up and clamped to [0, 100]. The same score drives the
severity band, the bottleneck flag and the insight template.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from bottleneckiq.config import settings
from bottleneckiq.exceptions import ValidationError
from bottleneckiq.models import (
    ProcessObservation,
    ProcessStatus,
    RiskAnalysis,
    RiskLevel,
    RiskThresholds,
    parse_status,
)

logger = logging.getLogger(__name__)

# (minimum |delay %|, points), checked top-down
DELAY_PERCENTAGE_BANDS: list[tuple[float, float]] = [
    (50.0, 50.0),
    (30.0, 40.0),
    (20.0, 30.0),
    (10.0, 20.0),
]

STATUS_POINTS: dict[ProcessStatus, int] = {
    ProcessStatus.CRITICAL: 40,
    ProcessStatus.FAILED: 35,
    ProcessStatus.DELAYED: 20,
    ProcessStatus.IN_PROGRESS: 10,
    ProcessStatus.COMPLETED: 0,
    ProcessStatus.UNKNOWN: 0,
}

# (minimum delay minutes, points), checked top-down; any positive delay earns 3
DELAY_MINUTES_BANDS: list[tuple[float, int]] = [
    (60.0, 10),
    (30.0, 7),
    (15.0, 5),
]
ANY_DELAY_POINTS = 3

MAX_RISK_SCORE = 100


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up (2.5 -> 3, -6.65 -> -6.6).

    Python's round() uses banker's rounding, which would make scores and
    rendered messages differ from the dashboard's numbers.
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def calculate_delay_percentage(actual_duration: float, average_duration: float) -> float:
    """Signed overrun of actual vs. expected duration, in percent.

    A zero baseline has no meaningful percentage and yields 0.
    """
    if average_duration <= 0:
        return 0.0
    return (actual_duration - average_duration) / average_duration * 100


def rounded_delay_percentage(actual_duration: float, average_duration: float) -> int:
    """Whole-number delay percentage, rounded once from the raw value.

    Rounding the one-decimal RiskAnalysis.delay_percentage again would turn
    2.45 into 2.5 and then 3.
    """
    return int(round_half_up(calculate_delay_percentage(actual_duration, average_duration)))


def delay_percentage_component(delay_percentage: float) -> float:
    """Points (0-50) for the size of the overrun, early or late."""
    magnitude = abs(delay_percentage)
    for minimum, points in DELAY_PERCENTAGE_BANDS:
        if magnitude >= minimum:
            return points
    return magnitude


def status_component(status: ProcessStatus | str) -> int:
    """Points (0-40) for the process status."""
    parsed = parse_status(status)
    if parsed is ProcessStatus.UNKNOWN:
        logger.warning("Status '%s' contributes no risk points", status)
    return STATUS_POINTS[parsed]


def delay_duration_component(delay_seconds: float) -> int:
    """Points (0-10) for the absolute delay, measured in minutes."""
    delay_minutes = delay_seconds / 60
    for minimum, points in DELAY_MINUTES_BANDS:
        if delay_minutes >= minimum:
            return points
    if delay_minutes > 0:
        return ANY_DELAY_POINTS
    return 0


def calculate_risk_score(
    actual_duration: float,
    average_duration: float,
    status: ProcessStatus | str,
) -> int:
    """Calculate the 0-100 risk score for one observation.

    Args:
        actual_duration: Time taken, in seconds.
        average_duration: Expected time, in seconds. Zero is allowed and
            disables the percentage component.
        status: Process status.

    Returns:
        Integer risk score in [0, 100].

    Raises:
        ValidationError: If either duration is negative, infinite or NaN.
    """
    if not (math.isfinite(actual_duration) and math.isfinite(average_duration)):
        raise ValidationError(
            message=f"Non-finite duration (actual={actual_duration}, average={average_duration})",
            field="duration",
            value=f"{actual_duration}/{average_duration}",
            user_message="Durations must be finite numbers.",
        )

    if actual_duration < 0 or average_duration < 0:
        raise ValidationError(
            message=f"Negative duration (actual={actual_duration}, average={average_duration})",
            field="duration",
            value=f"{actual_duration}/{average_duration}",
            user_message="Durations cannot be negative.",
        )

    delay_percentage = calculate_delay_percentage(actual_duration, average_duration)
    raw_score = (
        delay_percentage_component(delay_percentage)
        + status_component(status)
        + delay_duration_component(actual_duration - average_duration)
    )
    return max(0, min(int(round_half_up(raw_score)), MAX_RISK_SCORE))


def classify_risk(risk_score: int, thresholds: RiskThresholds | None = None) -> RiskLevel:
    """Map a risk score to its severity band."""
    thresholds = thresholds or settings.thresholds
    if risk_score >= thresholds.critical:
        return RiskLevel.CRITICAL
    if risk_score >= thresholds.high:
        return RiskLevel.HIGH
    if risk_score >= thresholds.medium:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def is_bottleneck(risk_score: int, thresholds: RiskThresholds | None = None) -> bool:
    """Score-only bottleneck check (panel display)."""
    thresholds = thresholds or settings.thresholds
    return risk_score >= thresholds.bottleneck_score


def is_bottleneck_combined(
    risk_score: int,
    delay_percentage: float,
    thresholds: RiskThresholds | None = None,
    score_threshold: int | None = None,
) -> bool:
    """Bottleneck check that also admits large overruns with a modest score.

    Args:
        risk_score: Score from calculate_risk_score().
        delay_percentage: Signed delay percentage.
        thresholds: Threshold set (defaults to settings).
        score_threshold: Override for the score part, e.g. a caller-chosen
            insight threshold.
    """
    thresholds = thresholds or settings.thresholds
    min_score = thresholds.bottleneck_score if score_threshold is None else score_threshold
    return risk_score >= min_score or delay_percentage >= thresholds.bottleneck_delay_pct


def analyze_observation(
    observation: ProcessObservation,
    thresholds: RiskThresholds | None = None,
) -> RiskAnalysis:
    """Score, classify and flag a single observation."""
    thresholds = thresholds or settings.thresholds

    risk_score = calculate_risk_score(
        observation.actual_duration,
        observation.average_duration,
        observation.status,
    )
    delay_percentage = calculate_delay_percentage(
        observation.actual_duration, observation.average_duration
    )

    analysis = RiskAnalysis(
        process_name=observation.name,
        process_id=observation.process_id,
        status=observation.status,
        actual_duration=observation.actual_duration,
        average_duration=observation.average_duration,
        delay_percentage=round_half_up(delay_percentage, 1),
        delay_time=observation.delay_seconds,
        risk_score=risk_score,
        risk_level=classify_risk(risk_score, thresholds),
        is_potential_bottleneck=is_bottleneck(risk_score, thresholds),
    )

    logger.debug(
        "Scored %s: risk=%d (%s), delay=%.1f%%",
        analysis.process_name,
        analysis.risk_score,
        analysis.risk_level.value,
        analysis.delay_percentage,
    )
    return analysis


def analyze_observations(
    observations: Iterable[ProcessObservation],
    thresholds: RiskThresholds | None = None,
) -> list[RiskAnalysis]:
    """Analyze a batch, preserving input order.

    An observation that fails to score is logged and skipped; the rest of
    the batch is still returned.
    """
    analyses: list[RiskAnalysis] = []
    skipped = 0

    for observation in observations:
        try:
            analyses.append(analyze_observation(observation, thresholds))
        except (ValidationError, PydanticValidationError, ArithmeticError) as e:
            skipped += 1
            logger.warning("Skipping process '%s': %s", observation.name, e)

    logger.info(
        "Analyzed %d processes (%d bottlenecks, %d skipped)",
        len(analyses),
        sum(1 for a in analyses if a.is_potential_bottleneck),
        skipped,
    )
    return analyses


def analyze_records(
    records: Iterable[Mapping[str, Any]],
    thresholds: RiskThresholds | None = None,
) -> list[RiskAnalysis]:
    """Validate raw records (e.g. rows from the data source) and analyze them.

    Records failing validation (negative durations, missing fields) are
    logged and skipped instead of failing the batch.
    """
    observations: list[ProcessObservation] = []

    for idx, record in enumerate(records):
        try:
            observations.append(ProcessObservation.model_validate(record))
        except PydanticValidationError as e:
            logger.warning(
                "Record %d (%s) failed validation: %d error(s)",
                idx,
                record.get("name", "<unnamed>"),
                e.error_count(),
            )

    return analyze_observations(observations, thresholds)
