"""Tests for the savings evaluator.

Tests:
- Cheapest detection with earliest-start tie-break
- Equal-price ties counting as cheapest
- Baseline selection (window peak vs horizon edge)
- Minimum savings threshold
"""

import pytest

from custom_components.heat_capacitor.const import BaselineMode, TemperatureAction
from custom_components.heat_capacitor.exceptions import InvalidConfig, NoCoverage
from custom_components.heat_capacitor.models import ReachWindow
from custom_components.heat_capacitor.optimization.savings_evaluator import SavingsEvaluator
from custom_components.heat_capacitor.optimization.schedule_index import PriceScheduleIndex


def _evaluate(make_schedule, clock, prices, now, earliest, latest, min_savings=1.0, **kwargs):
    index = PriceScheduleIndex.build(make_schedule(prices))
    window = ReachWindow(earliest=clock(earliest), latest=clock(latest))
    evaluator = SavingsEvaluator(**kwargs)
    return evaluator.evaluate(index.segment_at(clock(now)), window, index, min_savings)


class TestCheapestDetection:
    """Test whether the current segment is the cheapest in the window."""

    def test_cheapest_current_segment_boosts(self, make_schedule, clock):
        """Test current segment at the window minimum boosts."""
        result = _evaluate(make_schedule, clock, [10.0, 8.0], "01:30", "00:30", "02:00")

        assert result.action == TemperatureAction.BOOST
        assert result.is_cheapest is True
        assert result.cheapest.unit_price == 8.0
        assert result.baseline.unit_price == 10.0
        assert result.savings == pytest.approx(2.0)
        assert result.segment_count == 2

    def test_cheaper_segment_ahead_holds(self, make_schedule, clock):
        """Test a cheaper segment within reach makes us wait."""
        result = _evaluate(make_schedule, clock, [10.0, 8.0], "00:30", "00:00", "01:05")

        assert result.action == TemperatureAction.HOLD
        assert result.is_cheapest is False
        assert result.cheapest.start == clock("01:00")

    def test_cheaper_segment_out_of_reach_ignored(self, make_schedule, clock):
        """Test segments outside the window do not count."""
        # Window ends before the cheap 02:00 segment
        result = _evaluate(make_schedule, clock, [10.0, 12.0, 5.0], "00:30", "00:00", "01:30")

        assert result.is_cheapest is True
        assert result.action == TemperatureAction.BOOST
        assert result.savings == pytest.approx(2.0)

    def test_tie_break_prefers_earliest_start(self, make_schedule, clock):
        """Test equal minimal prices resolve to the earliest segment."""
        result = _evaluate(make_schedule, clock, [8.0, 8.0, 12.0], "01:30", "00:30", "02:05")

        assert result.cheapest.start == clock("00:00")

    def test_equal_price_counts_as_cheapest(self, make_schedule, clock):
        """Test sharing the minimal price is enough, avoiding starvation."""
        result = _evaluate(make_schedule, clock, [8.0, 8.0, 12.0], "01:30", "00:30", "02:05")

        assert result.is_cheapest is True
        assert result.action == TemperatureAction.BOOST
        assert result.savings == pytest.approx(4.0)


class TestBaseline:
    """Test baseline modes."""

    def test_default_mode_is_window_peak(self):
        """Test window peak is the default baseline."""
        assert SavingsEvaluator().baseline_mode == BaselineMode.WINDOW_PEAK

    def test_mode_accepts_string(self):
        """Test baseline mode can be configured from a plain string."""
        assert SavingsEvaluator("horizon_edge").baseline_mode == BaselineMode.HORIZON_EDGE

    def test_unknown_mode_rejected(self):
        """Test unknown modes are rejected as a configuration error."""
        with pytest.raises(InvalidConfig) as exc_info:
            SavingsEvaluator("average")

        assert exc_info.value.field == "baseline_mode"
        assert "window_peak" in exc_info.value.message

    def test_window_peak_uses_most_expensive_segment(self, make_schedule, clock):
        """Test peak baseline looks at the priciest segment anywhere in the window."""
        result = _evaluate(make_schedule, clock, [14.0, 8.0, 9.0], "01:30", "00:30", "02:30")

        assert result.baseline.unit_price == 14.0
        assert result.savings == pytest.approx(6.0)

    def test_horizon_edge_uses_latest_segment(self, make_schedule, clock):
        """Test edge baseline uses the segment at the latest edge of the window."""
        result = _evaluate(
            make_schedule,
            clock,
            [14.0, 8.0, 9.0],
            "01:30",
            "00:30",
            "02:30",
            baseline_mode=BaselineMode.HORIZON_EDGE,
        )

        assert result.baseline.unit_price == 9.0
        assert result.savings == pytest.approx(1.0)
        assert result.action == TemperatureAction.BOOST

    def test_horizon_edge_in_last_segment_has_no_savings(self, make_schedule, clock):
        """Test edge baseline inside the open-ended last segment compares with itself."""
        result = _evaluate(
            make_schedule,
            clock,
            [10.0, 8.0],
            "01:30",
            "00:30",
            "02:05",
            baseline_mode=BaselineMode.HORIZON_EDGE,
        )

        assert result.baseline.start == clock("01:00")
        assert result.savings == 0.0
        assert result.action == TemperatureAction.HOLD


class TestMinimumSavings:
    """Test the minimum savings threshold."""

    def test_savings_equal_to_minimum_boosts(self, make_schedule, clock):
        """Test the threshold is inclusive."""
        result = _evaluate(
            make_schedule, clock, [10.0, 8.0], "01:30", "00:30", "02:00", min_savings=2.0
        )

        assert result.action == TemperatureAction.BOOST

    def test_savings_below_minimum_holds(self, make_schedule, clock):
        """Test cheapest but not cheap enough holds."""
        result = _evaluate(
            make_schedule, clock, [10.0, 8.0], "01:30", "00:30", "02:00", min_savings=2.5
        )

        assert result.is_cheapest is True
        assert result.action == TemperatureAction.HOLD

    def test_zero_minimum_boosts_on_flat_prices(self, make_schedule, clock):
        """Test flat prices boost only when no savings are required."""
        result = _evaluate(
            make_schedule, clock, [8.0, 8.0], "01:30", "00:30", "02:00", min_savings=0.0
        )

        assert result.action == TemperatureAction.BOOST
        assert result.savings == 0.0

    def test_negative_minimum_rejected(self, make_schedule, clock):
        """Test negative minimum savings is a configuration error."""
        with pytest.raises(InvalidConfig) as exc_info:
            _evaluate(make_schedule, clock, [10.0, 8.0], "01:30", "00:30", "02:00", min_savings=-1)

        assert exc_info.value.field == "bounds.min_savings"

    def test_negative_prices(self, make_schedule, clock):
        """Test negative prices (paid to consume) are handled like any other price."""
        result = _evaluate(make_schedule, clock, [5.0, -3.0], "01:30", "00:30", "02:00")

        assert result.action == TemperatureAction.BOOST
        assert result.savings == pytest.approx(8.0)


def test_window_without_segments(make_schedule, clock):
    """Test a window outside the schedule reports missing coverage."""
    index = PriceScheduleIndex.build(make_schedule([10.0, 8.0], start=clock("05:00")))
    current = index.points[0]
    window = ReachWindow(earliest=clock("01:00"), latest=clock("02:00"))

    with pytest.raises(NoCoverage) as exc_info:
        SavingsEvaluator().evaluate(current, window, index, 1.0)

    assert exc_info.value.field == "window"
