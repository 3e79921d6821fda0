"""Tests for TimeRange and the day-bucketed TimeSegmentIndex."""
import json
from datetime import datetime

import pytest

from time_segments import (
    TimeRange,
    TimeSegmentIndex,
    demo_ranges,
    demo_timeline,
    load_time_ranges,
    time_bounds,
)
from time_utils import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE


def hours(n):
    return n * MS_PER_HOUR


class TestTimeRange:
    def test_rejects_reversed(self):
        with pytest.raises(ValueError):
            TimeRange(10, 5)

    def test_empty_range_allowed(self):
        assert TimeRange(5, 5).start == 5

    def test_covered_days_spans_dates(self, tz):
        start = int(datetime(2015, 11, 26, 10, 10, 30, tzinfo=tz).timestamp() * 1000)
        end = int(datetime(2015, 11, 29, 19, 12, 55, tzinfo=tz).timestamp() * 1000)
        first = int(datetime(2015, 11, 26, tzinfo=tz).timestamp() * 1000)

        days = TimeRange(start, end).covered_days(tz)

        assert days == [first + i * MS_PER_DAY for i in range(4)]

    def test_covered_days_single_day(self, tz, midnight):
        assert TimeRange(midnight + hours(1), midnight + hours(2)).covered_days(tz) == [midnight]

    def test_covered_days_ends_on_midnight(self, tz, midnight):
        r = TimeRange(midnight - hours(1), midnight)
        assert r.covered_days(tz) == [midnight - MS_PER_DAY, midnight]

    def test_overlaps_is_inclusive(self):
        r = TimeRange(100, 200)
        assert r.overlaps(200, 300)
        assert r.overlaps(0, 100)
        assert not r.overlaps(201, 300)

    def test_time_bounds(self):
        assert time_bounds([TimeRange(5, 10), TimeRange(1, 3), TimeRange(7, 20)]) == (1, 20)
        assert time_bounds([]) is None


class TestDaylightSaving:
    """Day buckets follow calendar dates when a day is 23 or 25 hours long."""

    def at(self, zone, *args):
        return int(datetime(*args, tzinfo=zone).timestamp() * 1000)

    def test_covered_days_across_spring_forward(self, new_york):
        r = TimeRange(self.at(new_york, 2024, 3, 9, 12), self.at(new_york, 2024, 3, 11, 12))

        days = r.covered_days(new_york)

        assert days == [
            self.at(new_york, 2024, 3, 9),
            self.at(new_york, 2024, 3, 10),
            self.at(new_york, 2024, 3, 11),
        ]
        assert days[2] - days[1] == hours(23)

    def test_covered_days_across_fall_back(self, new_york):
        r = TimeRange(self.at(new_york, 2024, 11, 2, 20), self.at(new_york, 2024, 11, 4, 1))

        days = r.covered_days(new_york)

        assert len(days) == 3
        assert days[2] - days[1] == hours(25)

    def test_lookup_on_day_after_spring_forward(self, new_york):
        r = TimeRange(self.at(new_york, 2024, 3, 9, 12), self.at(new_york, 2024, 3, 11, 12))
        index = TimeSegmentIndex([r], new_york)

        window_start = self.at(new_york, 2024, 3, 11, 6)
        window_end = self.at(new_york, 2024, 3, 11, 9)

        assert index.find_first_overlapping(window_start, window_end) == 0
        assert list(index.iter_overlapping(window_start, window_end)) == [(0, r)]

    def test_probe_steps_over_short_day(self, new_york):
        later = TimeRange(self.at(new_york, 2024, 3, 12, 8), self.at(new_york, 2024, 3, 12, 9))
        index = TimeSegmentIndex([later], new_york)

        start = self.at(new_york, 2024, 3, 9, 12)
        assert index.find_first_overlapping(start, self.at(new_york, 2024, 3, 13)) == 0


class TestTimeSegmentIndex:
    @pytest.fixture
    def three_days(self, midnight):
        return [
            TimeRange(midnight + hours(2), midnight + hours(3)),
            TimeRange(midnight + MS_PER_DAY + hours(2), midnight + MS_PER_DAY + hours(3)),
            TimeRange(midnight + 2 * MS_PER_DAY + hours(2), midnight + 2 * MS_PER_DAY + hours(3)),
        ]

    def test_three_days_three_buckets(self, three_days, tz, midnight):
        index = TimeSegmentIndex.build(three_days, tz)

        assert len(index) == 3
        assert index.days() == [midnight, midnight + MS_PER_DAY, midnight + 2 * MS_PER_DAY]
        for day, expected in zip(index.days(), three_days):
            assert index.ranges_on_day(day) == [expected]

    def test_find_first_on_middle_day(self, three_days, tz, midnight):
        index = TimeSegmentIndex.build(three_days, tz)
        window_start = midnight + MS_PER_DAY + hours(1)
        assert index.find_first_overlapping(window_start, window_start + hours(6)) == 1

    def test_multi_day_range_in_every_bucket(self, tz, midnight):
        long_range = TimeRange(midnight + hours(20), midnight + 2 * MS_PER_DAY + hours(1))
        index = TimeSegmentIndex.build([long_range], tz)
        assert index.days() == [midnight, midnight + MS_PER_DAY, midnight + 2 * MS_PER_DAY]

    def test_unsorted_input_keeps_order(self, tz, midnight):
        late = TimeRange(midnight + hours(10), midnight + hours(11))
        early = TimeRange(midnight + hours(1), midnight + hours(2))
        index = TimeSegmentIndex.build([late, early], tz)

        assert index.ranges == (late, early)
        assert index.ranges_on_day(midnight) == [late, early]
        assert index.time_bounds == (early.start, late.end)

    def test_probes_forward_over_empty_days(self, tz, midnight):
        target = TimeRange(midnight + 2 * MS_PER_DAY + hours(5), midnight + 2 * MS_PER_DAY + hours(6))
        index = TimeSegmentIndex.build([target], tz)
        assert index.find_first_overlapping(midnight + hours(12), midnight + 3 * MS_PER_DAY) == 0

    def test_gives_up_at_horizon(self, tz, midnight):
        far = TimeRange(midnight + 5 * MS_PER_DAY, midnight + 5 * MS_PER_DAY + hours(1))
        index = TimeSegmentIndex.build([far], tz)
        assert index.find_first_overlapping(midnight, midnight + 2 * MS_PER_DAY) is None

    def test_empty_index(self, tz, midnight):
        index = TimeSegmentIndex(tz=tz)
        assert len(index) == 0
        assert index.time_bounds is None
        assert index.find_first_overlapping(midnight, midnight + MS_PER_DAY) is None
        assert list(index.iter_overlapping(midnight, midnight + MS_PER_DAY)) == []


class TestIterOverlapping:
    @pytest.fixture
    def index(self, tz, midnight):
        return TimeSegmentIndex.build([
            TimeRange(midnight + hours(1), midnight + hours(2)),
            TimeRange(midnight + hours(3), midnight + hours(5)),
            TimeRange(midnight + hours(4), midnight + hours(4) + 30 * MS_PER_MINUTE),
        ], tz)

    def test_stops_after_range_closing_the_window(self, index, midnight):
        found = [pos for pos, _ in index.iter_overlapping(midnight, midnight + hours(4))]
        # the range ending at 05:00 closes the window; the one after it is not visited
        assert found == [0, 1]

    def test_skips_ranges_before_the_window(self, index, midnight):
        found = [pos for pos, _ in index.iter_overlapping(midnight + hours(3), midnight + hours(6))]
        assert found == [1, 2]


class TestRangeFiles:
    def test_load_mixed_values(self, tmp_path, tz, midnight):
        path = tmp_path / "ranges.json"
        path.write_text(json.dumps([
            {"start": midnight, "end": midnight + MS_PER_HOUR},
            {"start": "2024-03-10T05:00:00", "end": "2024-03-10T06:00:00"},
        ]))

        ranges = load_time_ranges(path, tz)

        assert ranges[0] == TimeRange(midnight, midnight + MS_PER_HOUR)
        assert ranges[1] == TimeRange(midnight + hours(5), midnight + hours(6))

    @pytest.mark.parametrize("content", [
        {"start": 1, "end": 2},
        [{"start": 1}],
        [{"start": 5, "end": 1}],
        ["not an object"],
    ])
    def test_malformed_file(self, tmp_path, content):
        path = tmp_path / "ranges.json"
        path.write_text(json.dumps(content))
        with pytest.raises(ValueError):
            load_time_ranges(path)


class TestDemoData:
    def test_demo_ranges(self):
        now = 1_700_000_000_000
        ranges = demo_ranges(now)

        assert len(ranges) == 3
        assert ranges[0].end - ranges[0].start == 32 * MS_PER_MINUTE
        assert ranges[1].start - ranges[0].start == hours(18)
        assert ranges[2] == TimeRange(now - 5 * MS_PER_MINUTE, now)

    def test_demo_timeline(self):
        left, right, cursor = demo_timeline(0, record_days=7, lead_hours=3)
        assert right == hours(3)
        assert left == right - 7 * MS_PER_DAY
        assert cursor == right
