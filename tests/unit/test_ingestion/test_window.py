"""Tests for bottleneckiq.ingestion.window."""

from datetime import timedelta

import pytest

from bottleneckiq.exceptions import ValidationError
from bottleneckiq.ingestion.window import TimeWindow, filter_observations
from bottleneckiq.models import ProcessObservation, ProcessStatus


class TestTimeWindow:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("last1Hour", TimeWindow.LAST_1_HOUR),
            ("last24Hours", TimeWindow.LAST_24_HOURS),
            ("6h", TimeWindow.LAST_6_HOURS),
            (" 7d ", TimeWindow.LAST_7_DAYS),
            (TimeWindow.LAST_7_DAYS, TimeWindow.LAST_7_DAYS),
        ],
    )
    def test_parse(self, value, expected):
        assert TimeWindow.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            TimeWindow.parse("last30Days")
        assert exc_info.value.field == "window"

    def test_durations(self):
        assert TimeWindow.LAST_1_HOUR.duration == timedelta(hours=1)
        assert TimeWindow.LAST_7_DAYS.duration == timedelta(days=7)

    def test_start(self, now):
        assert TimeWindow.LAST_6_HOURS.start(now) == now - timedelta(hours=6)


class TestFilterObservations:
    def test_no_filters_keeps_everything(self, warehouse_observations):
        assert filter_observations(warehouse_observations) == warehouse_observations

    @pytest.mark.parametrize(
        ("window", "expected"),
        [
            ("last1Hour", ["Dispatch"]),
            ("last6Hours", ["Receiving", "Quality Check", "Dispatch"]),
            ("last24Hours", ["Receiving", "Quality Check", "Material Picking", "Dispatch"]),
            ("last7Days", ["Receiving", "Quality Check", "Material Picking", "Dispatch", "Packaging"]),
        ],
    )
    def test_window(self, warehouse_observations, now, window, expected):
        kept = filter_observations(warehouse_observations, window=window, now=now)
        assert [o.name for o in kept] == expected

    def test_untimed_dropped_only_with_window(self, zero_baseline, now):
        assert filter_observations([zero_baseline], now=now) == [zero_baseline]
        assert filter_observations([zero_baseline], window="24h", now=now) == []

    def test_naive_timestamp_treated_as_utc(self, now):
        obs = ProcessObservation(
            name="Sorting",
            actual_duration=60,
            average_duration=60,
            status="completed",
            timestamp=(now - timedelta(minutes=10)).replace(tzinfo=None),
        )
        assert filter_observations([obs], window="1h", now=now) == [obs]

    def test_status_filter(self, warehouse_observations):
        kept = filter_observations(warehouse_observations, status="failed")
        assert [o.name for o in kept] == ["Packaging"]

    def test_status_filter_accepts_enum(self, warehouse_observations):
        kept = filter_observations(warehouse_observations, status=ProcessStatus.DELAYED)
        assert [o.name for o in kept] == ["Quality Check"]

    def test_name_filter(self, warehouse_observations):
        kept = filter_observations(warehouse_observations, name="Dispatch")
        assert len(kept) == 1

    def test_combined_filters(self, warehouse_observations, now):
        kept = filter_observations(
            warehouse_observations, window="last24Hours", status="in-progress", now=now
        )
        assert [o.name for o in kept] == ["Material Picking"]

    def test_empty_input(self, now):
        assert filter_observations([], window="1h", now=now) == []
