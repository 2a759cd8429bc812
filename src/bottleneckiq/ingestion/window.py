"""Time-window and attribute filtering of observations."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from enum import Enum

from bottleneckiq.exceptions import ValidationError
from bottleneckiq.models import ProcessObservation, ProcessStatus, parse_status

logger = logging.getLogger(__name__)


class TimeWindow(str, Enum):
    """The fixed look-back windows offered by the dashboard."""

    LAST_1_HOUR = "last1Hour"
    LAST_6_HOURS = "last6Hours"
    LAST_24_HOURS = "last24Hours"
    LAST_7_DAYS = "last7Days"

    @property
    def duration(self) -> timedelta:
        return _WINDOW_DURATIONS[self]

    def start(self, now: datetime | None = None) -> datetime:
        """Earliest timestamp inside the window ending at ``now``."""
        return (now or datetime.now(UTC)) - self.duration

    @classmethod
    def parse(cls, value: "str | TimeWindow") -> "TimeWindow":
        """Parse a window id or its short alias ("1h", "6h", "24h", "7d")."""
        if isinstance(value, TimeWindow):
            return value
        key = value.strip()
        if key in _WINDOW_ALIASES:
            return _WINDOW_ALIASES[key]
        try:
            return cls(key)
        except ValueError as e:
            raise ValidationError(
                message=f"Unknown time window: {value}",
                field="window",
                value=str(value),
                user_message="Time window must be one of: "
                + ", ".join(w.value for w in cls),
            ) from e


_WINDOW_DURATIONS: dict[TimeWindow, timedelta] = {
    TimeWindow.LAST_1_HOUR: timedelta(hours=1),
    TimeWindow.LAST_6_HOURS: timedelta(hours=6),
    TimeWindow.LAST_24_HOURS: timedelta(hours=24),
    TimeWindow.LAST_7_DAYS: timedelta(days=7),
}

_WINDOW_ALIASES: dict[str, TimeWindow] = {
    "1h": TimeWindow.LAST_1_HOUR,
    "6h": TimeWindow.LAST_6_HOURS,
    "24h": TimeWindow.LAST_24_HOURS,
    "7d": TimeWindow.LAST_7_DAYS,
}


def _as_aware(ts: datetime) -> datetime:
    # Naive timestamps from storage are UTC
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=UTC)


def filter_observations(
    observations: Iterable[ProcessObservation],
    window: TimeWindow | str | None = None,
    status: ProcessStatus | str | None = None,
    name: str | None = None,
    now: datetime | None = None,
) -> list[ProcessObservation]:
    """Select observations by time window, status and/or process name.

    Observations without a timestamp cannot be placed in a window and are
    dropped when a window is given. Input order is preserved.

    Args:
        observations: Observations to filter.
        window: Look-back window (enum, id, or short alias).
        status: Keep only this status.
        name: Keep only this process name (exact match).
        now: Window end; defaults to the current UTC time.
    """
    start = _as_aware(TimeWindow.parse(window).start(now)) if window else None
    wanted_status = parse_status(status) if status else None

    kept: list[ProcessObservation] = []
    untimed = 0
    for obs in observations:
        if start is not None:
            if obs.timestamp is None:
                untimed += 1
                continue
            if _as_aware(obs.timestamp) < start:
                continue
        if wanted_status is not None and obs.status is not wanted_status:
            continue
        if name is not None and obs.name != name:
            continue
        kept.append(obs)

    if untimed:
        logger.debug("Dropped %d observations without timestamp", untimed)
    logger.debug(
        "Filtered observations: %d kept (window=%s, status=%s, name=%s)",
        len(kept),
        window or "all",
        status or "all",
        name or "all",
    )
    return kept
