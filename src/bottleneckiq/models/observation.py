"""Process observation models for BottleneckIQ."""

import logging
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ProcessStatus(str, Enum):
    """Status of a process run as reported by the data source."""

    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    DELAYED = "delayed"
    CRITICAL = "critical"
    FAILED = "failed"
    # Unrecognised input; scores as 0 and is logged at validation time
    UNKNOWN = "unknown"


class DurationUnit(str, Enum):
    """Units a raw duration may arrive in."""

    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    MINUTES = "minutes"


# Spellings seen in storage and the dashboard that map onto a known status
STATUS_ALIASES: dict[str, ProcessStatus] = {
    "in_progress": ProcessStatus.IN_PROGRESS,
    "inprogress": ProcessStatus.IN_PROGRESS,
    "on-track": ProcessStatus.IN_PROGRESS,
    "running": ProcessStatus.IN_PROGRESS,
    "done": ProcessStatus.COMPLETED,
}


def parse_status(value: str | ProcessStatus | None) -> ProcessStatus:
    """Parse a raw status string, mapping unknown values to UNKNOWN.

    Unknown values are logged rather than rejected so a single bad record
    cannot fail a whole batch.
    """
    if isinstance(value, ProcessStatus):
        return value
    if value is None:
        logger.warning("Missing process status, scoring as unknown")
        return ProcessStatus.UNKNOWN

    normalized = str(value).strip().lower().replace(" ", "-")
    if normalized in STATUS_ALIASES:
        return STATUS_ALIASES[normalized]
    try:
        return ProcessStatus(normalized)
    except ValueError:
        logger.warning("Unrecognised process status '%s', scoring as unknown", value)
        return ProcessStatus.UNKNOWN


class ProcessObservation(BaseModel):
    """A single timing observation of a process step.

    Durations are always stored in seconds. Use from_raw() when the
    source reports another unit.
    """

    name: str = Field(..., min_length=1, description="Process step name, e.g. 'Dispatch'")
    process_id: str | None = Field(default=None, description="Identifier from the data source")
    actual_duration: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Time actually taken, in seconds"
    )
    average_duration: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Expected/baseline time, in seconds"
    )
    status: ProcessStatus = Field(..., description="Status of the run")
    timestamp: datetime | None = Field(
        default=None, description="When the observation was recorded"
    )

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: str | ProcessStatus | None) -> ProcessStatus:
        """Accept aliases and case variants; unknown values become UNKNOWN."""
        return parse_status(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @property
    def delay_seconds(self) -> float:
        """Actual minus expected duration (negative when finished early)."""
        return self.actual_duration - self.average_duration

    @classmethod
    def from_raw(
        cls,
        name: str,
        actual_duration: float,
        average_duration: float,
        status: str | ProcessStatus,
        unit: DurationUnit = DurationUnit.SECONDS,
        process_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> "ProcessObservation":
        """Build an observation from durations in any supported unit."""
        from bottleneckiq.analysis.normalizer import to_seconds

        return cls(
            name=name,
            process_id=process_id,
            actual_duration=to_seconds(actual_duration, unit),
            average_duration=to_seconds(average_duration, unit),
            status=status,  # type: ignore[arg-type]
            timestamp=timestamp,
        )
