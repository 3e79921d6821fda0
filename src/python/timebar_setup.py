"""Command-line options and timebar construction shared by the Qt and terminal hosts."""

import argparse
import logging
from datetime import tzinfo

from config_manager import config
from time_segments import demo_ranges, demo_timeline, load_time_ranges
from time_utils import now_ms
from timebar_manager import TimebarManager

logger = logging.getLogger(__name__)


def build_arg_parser(description: str) -> argparse.ArgumentParser:
    """Options accepted by both entry points."""
    defaults = config.get_timebar_defaults()
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument('--ranges', '-r', default=None,
                        help='JSON file of record ranges (default: built-in sample ranges)')
    parser.add_argument('--days', '-n', type=int, default=defaults.get("recordDays", 7),
                        help='Length of the timeline in days')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')
    return parser


def create_timebar_manager(
    viewport_width: int,
    days: int | None = None,
    ranges_path: str | None = None,
    tz: tzinfo | None = None,
    now: int | None = None
) -> TimebarManager:
    """Create a manager laid out like the demo: the timeline ends a few hours
    after now with the cursor at its right end.

    Raises:
        ValueError: If days is not positive or the range file is malformed
        OSError: If the range file cannot be read
    """
    defaults = config.get_timebar_defaults()
    record_days = days if days is not None else defaults.get("recordDays", 7)
    lead_hours = defaults.get("cursorLeadHours", 3)
    if record_days <= 0:
        raise ValueError(f"Timeline length must be at least one day, got {record_days}")

    now = now if now is not None else now_ms()
    manager = TimebarManager(
        viewport_width,
        tz=tz,
        now=now,
        record_days=record_days,
        cursor_lead_hours=lead_hours,
        default_criterion=defaults.get("defaultCriterion", 2),
    )
    manager.initialize(*demo_timeline(now, record_days, lead_hours))

    if ranges_path:
        manager.set_time_ranges(load_time_ranges(ranges_path, tz))
    else:
        manager.set_time_ranges(demo_ranges(now))
    logger.debug("Demo timebar ready: %d days, %d ranges", record_days, len(manager.time_ranges))
    return manager
