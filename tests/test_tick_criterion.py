"""Tests for the tick criterion ladder."""
import pytest

from enums import CriterionLevel, LabelFormat
from tick_criterion import (
    LADDER_SIZE,
    TICK_PRESETS,
    build_ladder,
    midpoint_width,
    standard_pixel_width,
)

WEEK_SECONDS = 7 * 24 * 3600


@pytest.fixture
def ladder():
    return build_ladder(WEEK_SECONDS, 1000)


class TestPresets:
    def test_five_levels(self):
        assert LADDER_SIZE == 5
        assert len(TICK_PRESETS) == 5

    def test_preset_values(self):
        assert TICK_PRESETS[0] == (600, 60, 6, LabelFormat.TIME_OF_DAY)
        assert TICK_PRESETS[1] == (3600, 600, 60, LabelFormat.TIME_OF_DAY)
        assert TICK_PRESETS[2] == (21600, 3600, 300, LabelFormat.TIME_OF_DAY)
        assert TICK_PRESETS[3] == (129600, 21600, 1800, LabelFormat.TIME_OF_DAY)
        assert TICK_PRESETS[4] == (518400, 86400, 7200, LabelFormat.MONTH_DAY)

    def test_minor_divides_major(self):
        for _, major, minor, _ in TICK_PRESETS:
            assert major % minor == 0


class TestBuildLadder:
    def test_six_hour_standard_width_for_a_week(self, ladder):
        # 1000 * 604800 / 21600
        assert ladder[2].standard_pixel_width == 28000

    def test_all_standard_widths(self, ladder):
        assert [c.standard_pixel_width for c in ladder] == [1008000, 168000, 28000, 4666, 1166]

    def test_levels_in_order(self, ladder):
        assert [c.level for c in ladder] == list(CriterionLevel)

    def test_spans_increase_and_widths_decrease(self, ladder):
        for i in range(LADDER_SIZE - 1):
            assert ladder[i].visible_span_seconds < ladder[i + 1].visible_span_seconds
            assert ladder[i].standard_pixel_width > ladder[i + 1].standard_pixel_width

    @pytest.mark.parametrize("total,viewport", [(3600, 320), (86400, 1080), (30 * 86400, 2560)])
    def test_width_truncates_toward_zero(self, total, viewport):
        for criterion in build_ladder(total, viewport):
            exact = viewport * total / criterion.visible_span_seconds
            assert criterion.standard_pixel_width == int(exact)

    @pytest.mark.parametrize("total,viewport", [(0, 1000), (-5, 1000), (3600, 0), (3600, -1)])
    def test_rejects_non_positive_input(self, total, viewport):
        with pytest.raises(ValueError):
            build_ladder(total, viewport)

    def test_standard_pixel_width_helper(self):
        assert standard_pixel_width(1000, WEEK_SECONDS, 129600) == 4666


class TestCriterion:
    def test_is_major(self, ladder):
        six_hours = ladder[2]
        assert six_hours.is_major(7200)
        assert not six_hours.is_major(7500)

    def test_label_formats(self, ladder):
        assert ladder[0].label_format == "%H:%M"
        assert ladder[4].label_format == "%m.%d"

    def test_midpoint_is_integer_average(self, ladder):
        assert midpoint_width(ladder, 0, 1) == 588000
        assert midpoint_width(ladder, 2, 3) == 16333
        assert midpoint_width(ladder, 3, 4) == 2916
