"""Duration normalization.

Storage reports seconds, the dashboard works in milliseconds. Every value
feeding the risk scorer goes through to_seconds() first because the
delay-duration component is measured in minutes.
"""

import math

from bottleneckiq.exceptions import ValidationError
from bottleneckiq.models.observation import DurationUnit

_SECONDS_PER_UNIT: dict[DurationUnit, float] = {
    DurationUnit.SECONDS: 1.0,
    DurationUnit.MILLISECONDS: 0.001,
    DurationUnit.MINUTES: 60.0,
}


def to_seconds(value: float, unit: DurationUnit | str = DurationUnit.SECONDS) -> float:
    """Convert a duration to seconds.

    Args:
        value: Raw duration.
        unit: Unit of the raw duration (enum or its string value).

    Returns:
        Duration in seconds.

    Raises:
        ValidationError: If the value is negative or the unit is unknown.
    """
    try:
        unit = DurationUnit(unit)
    except ValueError as e:
        raise ValidationError(
            message=f"Unknown duration unit: {unit}",
            field="unit",
            value=str(unit),
            user_message=f"Duration unit must be one of: {', '.join(u.value for u in DurationUnit)}.",
        ) from e

    if not math.isfinite(value):
        raise ValidationError(
            message=f"Non-finite duration: {value} {unit.value}",
            field="duration",
            value=str(value),
            user_message="Durations must be finite numbers.",
        )

    if value < 0:
        raise ValidationError(
            message=f"Negative duration: {value} {unit.value}",
            field="duration",
            value=str(value),
            user_message="Durations cannot be negative.",
        )

    return float(value) * _SECONDS_PER_UNIT[unit]


def from_seconds(value: float, unit: DurationUnit | str = DurationUnit.SECONDS) -> float:
    """Convert seconds back to another unit (for display layers)."""
    unit = DurationUnit(unit)
    return float(value) / _SECONDS_PER_UNIT[unit]
