"""
Record segments and their day-keyed index.

A TimeRange marks an interval for which recorded data exists; the recordbar
draws it as a coloured band. The TimeSegmentIndex groups ranges by every
local calendar day they touch so that the ranges visible in a window can be
found starting from the window's first populated day instead of scanning the
whole list.

The index is an immutable snapshot: replacing the record set builds a new
index rather than updating the old one in place.
"""

import json
import logging
import pathlib
from dataclasses import dataclass
from datetime import timedelta, tzinfo
from typing import Iterable, Iterator

from custom_types import EpochMs, TimeRangeRecord
from time_utils import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE, day_start_ms, local_date, parse_instant

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class TimeRange:
    """A closed interval [start, end] of epoch milliseconds with recorded data."""
    start: EpochMs
    end: EpochMs

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"TimeRange start {self.start} is after end {self.end}")

    def covered_days(self, tz: tzinfo | None = None) -> list[EpochMs]:
        """Local midnights of every calendar day this range touches, ascending.

        For a range from 2015-11-26 10:10:30 to 2015-11-29 19:12:55 this is the
        midnights of Nov 26, 27, 28 and 29.
        """
        day = local_date(self.start, tz)
        last = local_date(self.end, tz)
        days = []
        while day <= last:
            days.append(day_start_ms(day, tz))
            day += ONE_DAY
        return days

    def overlaps(self, window_start: EpochMs, window_end: EpochMs) -> bool:
        """Whether this range intersects the closed window."""
        return self.end >= window_start and self.start <= window_end


def time_bounds(ranges: Iterable[TimeRange]) -> tuple[EpochMs, EpochMs] | None:
    """Earliest start and latest end over all ranges, or None if there are none."""
    earliest: EpochMs | None = None
    latest: EpochMs | None = None
    for r in ranges:
        if earliest is None or r.start < earliest:
            earliest = r.start
        if latest is None or r.end > latest:
            latest = r.end
    if earliest is None or latest is None:
        return None
    return earliest, latest


class TimeSegmentIndex:
    """Day-bucketed lookup over an ordered list of TimeRanges."""

    _ranges: tuple[TimeRange, ...]
    _buckets: dict[EpochMs, list[int]]
    _tz: tzinfo | None
    _bounds: tuple[EpochMs, EpochMs] | None

    def __init__(self, ranges: Iterable[TimeRange] = (), tz: tzinfo | None = None) -> None:
        """Index ``ranges``, keeping their input order.

        Ranges may be unsorted and may overlap. Each range is appended to the
        bucket of every day it covers.
        """
        self._ranges = tuple(ranges)
        self._tz = tz
        self._buckets = {}

        for position, time_range in enumerate(self._ranges):
            for day in time_range.covered_days(tz):
                self._buckets.setdefault(day, []).append(position)

        self._bounds = time_bounds(self._ranges)
        logger.debug("Indexed %d ranges into %d day buckets", len(self._ranges), len(self._buckets))

    @classmethod
    def build(cls, ranges: Iterable[TimeRange], tz: tzinfo | None = None) -> 'TimeSegmentIndex':
        """Build a fresh index from ``ranges``."""
        return cls(ranges, tz)

    def __len__(self) -> int:
        return len(self._ranges)

    @property
    def ranges(self) -> tuple[TimeRange, ...]:
        """All ranges in input order."""
        return self._ranges

    @property
    def time_bounds(self) -> tuple[EpochMs, EpochMs] | None:
        """Earliest start and latest end of the indexed ranges."""
        return self._bounds

    def days(self) -> list[EpochMs]:
        """Midnights of all populated days, ascending."""
        return sorted(self._buckets)

    def ranges_on_day(self, day: EpochMs) -> list[TimeRange]:
        """Ranges in the bucket of ``day`` (a local midnight), in input order."""
        return [self._ranges[i] for i in self._buckets.get(day, [])]

    def find_first_overlapping(self, window_start: EpochMs, horizon: EpochMs) -> int | None:
        """Find where to start walking the range list for a window.

        Looks up the day containing ``window_start``; if that day has no
        ranges, probes forward one day at a time until a populated day is
        found or the probed day reaches ``horizon``.

        The cost is proportional to the number of empty days skipped, which
        stays small for a rolling window of a few days of mostly contiguous
        records but grows toward linear for very sparse data.

        Returns:
            Position in ``ranges`` of the first range of the found day, or
            None if no populated day lies within the horizon
        """
        day = local_date(window_start, self._tz)
        key = day_start_ms(day, self._tz)
        while key not in self._buckets:
            if key >= horizon:
                return None
            day += ONE_DAY
            key = day_start_ms(day, self._tz)
        return self._buckets[key][0]

    def iter_overlapping(
        self,
        window_start: EpochMs,
        window_end: EpochMs
    ) -> Iterator[tuple[int, TimeRange]]:
        """Yield (position, range) for ranges intersecting the window.

        Walks forward from find_first_overlapping and stops after the first
        range that ends at or past ``window_end``.
        """
        first = self.find_first_overlapping(window_start, window_end)
        if first is None:
            return
        for position in range(first, len(self._ranges)):
            time_range = self._ranges[position]
            if time_range.overlaps(window_start, window_end):
                yield position, time_range
            if time_range.end >= window_end:
                break


def load_time_ranges(path: str | pathlib.Path, tz: tzinfo | None = None) -> list[TimeRange]:
    """Load ranges from a JSON file.

    The file holds a list of ``{"start": ..., "end": ...}`` objects whose
    values are epoch milliseconds or ISO-8601 strings.

    Raises:
        ValueError: If the file content is not a list of valid range objects
    """
    with open(path, 'r', encoding='utf-8') as f:
        records: list[TimeRangeRecord] = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Range file {path} must contain a JSON list")

    ranges: list[TimeRange] = []
    for i, record in enumerate(records):
        try:
            ranges.append(TimeRange(parse_instant(record["start"], tz), parse_instant(record["end"], tz)))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Range #{i} in {path} is malformed: {e}") from e
    logger.info("Loaded %d time ranges from %s", len(ranges), path)
    return ranges


def demo_ranges(now: EpochMs) -> list[TimeRange]:
    """Three sample recordings around ``now``: two yesterday, one just ended."""
    yesterday = now - MS_PER_DAY
    return [
        TimeRange(yesterday, yesterday + 32 * MS_PER_MINUTE),
        TimeRange(yesterday + 18 * MS_PER_HOUR, yesterday + 18 * MS_PER_HOUR + 32 * MS_PER_MINUTE),
        TimeRange(now - 5 * MS_PER_MINUTE, now),
    ]


def demo_timeline(now: EpochMs, record_days: int = 7, lead_hours: int = 3) -> tuple[EpochMs, EpochMs, EpochMs]:
    """Bounds and cursor for the demo: ``record_days`` days ending ``lead_hours`` after now.

    Returns:
        Tuple of (left bound, right bound, cursor), with the cursor on the right bound
    """
    right = now + lead_hours * MS_PER_HOUR
    return right - record_days * MS_PER_DAY, right, right
