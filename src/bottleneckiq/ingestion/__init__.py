"""Observation ingestion for BottleneckIQ.

Example usage:
    >>> from bottleneckiq.ingestion import TimeWindow, filter_observations, load_observations_csv
    >>>
    >>> observations = load_observations_csv("process_steps.csv", unit="seconds")
    >>> recent = filter_observations(observations, window=TimeWindow.LAST_24_HOURS)
"""

from bottleneckiq.ingestion.csv_loader import load_observations_csv
from bottleneckiq.ingestion.window import TimeWindow, filter_observations

__all__ = [
    "TimeWindow",
    "filter_observations",
    "load_observations_csv",
]
