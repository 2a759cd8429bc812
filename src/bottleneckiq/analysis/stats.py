"""Run statistics over raw observations.

Counts and averages only; no scoring. Used alongside the risk analysis to
show how often each process ran and how it finished.
"""

import logging
from collections.abc import Sequence

from bottleneckiq.models import ProcessObservation, ProcessRunStats, ProcessStatus

logger = logging.getLogger(__name__)


def count_by_status(observations: Sequence[ProcessObservation]) -> dict[str, int]:
    """Count observations per status, plus a "total" entry.

    Every known status is present (zero if absent); "unknown" appears only
    when such observations exist.
    """
    counts: dict[str, int] = {"total": len(observations)}
    for status in ProcessStatus:
        if status is ProcessStatus.UNKNOWN:
            continue
        counts[status.value] = 0

    for obs in observations:
        counts[obs.status.value] = counts.get(obs.status.value, 0) + 1

    return counts


def summarize_by_process(
    observations: Sequence[ProcessObservation],
) -> list[ProcessRunStats]:
    """Group observations by name and compute per-process run statistics.

    Groups are returned in first-seen order.
    """
    groups: dict[str, list[ProcessObservation]] = {}
    for obs in observations:
        groups.setdefault(obs.name, []).append(obs)

    results: list[ProcessRunStats] = []
    for name, runs in groups.items():
        durations = [r.actual_duration for r in runs]
        status_counts: dict[str, int] = {}
        for r in runs:
            status_counts[r.status.value] = status_counts.get(r.status.value, 0) + 1

        results.append(
            ProcessRunStats(
                name=name,
                total_runs=len(runs),
                status_counts=status_counts,
                avg_duration=sum(durations) / len(durations),
                max_duration=max(durations),
                min_duration=min(durations),
                total_delay=sum(max(0.0, r.delay_seconds) for r in runs),
            )
        )

    logger.debug("Summarized %d observations into %d processes", len(observations), len(results))
    return results
