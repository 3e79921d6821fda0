"""
conftest.py - Shared pytest fixtures for timebar tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Fixed time zones and sample timelines
- Observers that record manager notifications
"""
import os
import sys
import json
import pathlib
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo
import pytest

# Run Qt headless when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Imports from timebar modules (now that path is configured)
from config_manager import ConfigManager
from time_segments import TimeRange
from timebar_manager import TimebarManager, TimebarObserver
from time_utils import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE


# Time Fixtures
# -------------

@pytest.fixture
def tz():
    """A fixed UTC+8 zone so day boundaries do not depend on the host."""
    return timezone(timedelta(hours=8))


@pytest.fixture
def new_york():
    """A zone with daylight saving; clocks jump forward on 2024-03-10 and back on 2024-11-03."""
    return ZoneInfo("America/New_York")


@pytest.fixture
def midnight(tz):
    """Local midnight of 2024-03-10 in the fixed zone, epoch ms."""
    return int(datetime(2024, 3, 10, tzinfo=tz).timestamp() * 1000)


@pytest.fixture
def week(midnight):
    """A seven-day timeline ending at the fixture midnight: (left, right)."""
    return midnight - 7 * MS_PER_DAY, midnight


@pytest.fixture
def manager(week, tz):
    """A 1000px-wide manager initialized on the seven-day timeline, cursor mid-week."""
    left, right = week
    m = TimebarManager(1000, tz=tz, now=right, default_criterion=2)
    m.initialize(left, right, left + 3 * MS_PER_DAY + 12 * MS_PER_HOUR)
    return m


@pytest.fixture
def sample_ranges(midnight):
    """Three ranges: two on the previous day, one crossing midnight."""
    day = midnight - MS_PER_DAY
    return [
        TimeRange(day + 1 * MS_PER_HOUR, day + 1 * MS_PER_HOUR + 32 * MS_PER_MINUTE),
        TimeRange(day + 18 * MS_PER_HOUR, day + 18 * MS_PER_HOUR + 32 * MS_PER_MINUTE),
        TimeRange(midnight - 10 * MS_PER_MINUTE, midnight + 20 * MS_PER_MINUTE),
    ]


# Observer Fixtures
# -----------------

class RecordingObserver(TimebarObserver):
    """Collects (event, visible_left, visible_right, cursor) tuples."""

    def __init__(self):
        self.events = []

    def on_move(self, visible_left, visible_right, cursor):
        self.events.append(("move", visible_left, visible_right, cursor))

    def on_move_finished(self, visible_left, visible_right, cursor):
        self.events.append(("move_finished", visible_left, visible_right, cursor))

    def on_scaled(self, visible_left, visible_right, cursor):
        self.events.append(("scaled", visible_left, visible_right, cursor))

    def on_scale_finished(self, visible_left, visible_right, cursor):
        self.events.append(("scale_finished", visible_left, visible_right, cursor))

    @property
    def names(self):
        return [e[0] for e in self.events]


@pytest.fixture
def recorder():
    """A fresh recording observer."""
    return RecordingObserver()


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data():
    """Create minimal test configuration data."""
    return {
        "colors": {
            "palette": {
                "background": "#FFFFFF",
                "recordbar": "#4CAF50",
                "cursor": "E53935"
            },
            "fonts": {
                "primary": "Arial"
            }
        },
        "strings": {
            "app": {
                "name": "Timebar Test"
            },
            "ui": {
                "windowTitle": "Test Timebar"
            },
            "buttons": {
                "zoomIn": "In",
                "zoomOut": "Out"
            }
        },
        "ui": {
            "timebar": {
                "viewHeight": 60,
                "recordbarHeight": 20
            }
        },
        "timebar": {
            "recordDays": 3,
            "cursorLeadHours": 1,
            "defaultCriterion": 1
        },
        "logging": {
            "level": "DEBUG"
        }
    }


@pytest.fixture
def temp_config_file(tmp_path, test_config_data):
    """Write the test configuration to a temporary config.json."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(test_config_data), encoding="utf-8")
    return path


@pytest.fixture
def mock_config(temp_config_file):
    """A ConfigManager loaded from the temporary config file."""
    return ConfigManager(cfg_path=temp_config_file, exit_on_error=False)
