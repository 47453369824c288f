"""Wheel, ratio and speed math tests. Pure arithmetic, no catalog."""

import math

import pytest

from cranksmith.core.enums import SpeedUnit
from cranksmith.core.exceptions import MalformedComponentError
from cranksmith.utils.converters import parse_speed_count, to_number
from cranksmith.utils.drivetrain_math import (
    KMH_TO_MPH,
    calculate_gear_inches,
    calculate_gear_range,
    calculate_gear_ratio,
    calculate_speed,
    calculate_wheel_circumference,
    get_rim_diameter,
    tire_width_mm,
    tooth_spread,
)


# =============================================================================
# Wheel
# =============================================================================

class TestWheel:
    def test_rim_diameters(self):
        assert get_rim_diameter("700c") == 622
        assert get_rim_diameter("650b") == 584
        assert get_rim_diameter("26-inch") == 559
        assert get_rim_diameter("27.5-inch") == 584
        assert get_rim_diameter("29-inch") == 622

    def test_unknown_wheel_size_raises(self):
        with pytest.raises(MalformedComponentError):
            get_rim_diameter("650c")

    def test_700c_25_circumference(self):
        assert calculate_wheel_circumference("700c", 25) == pytest.approx(math.pi * 672)

    def test_inch_tire_width_converted(self):
        assert tire_width_mm(2.35) == pytest.approx(59.69)
        assert calculate_wheel_circumference("29-inch", 2.35) == pytest.approx(math.pi * (622 + 2 * 59.69))

    def test_mm_tire_width_untouched(self):
        assert tire_width_mm(40) == 40.0

    def test_non_positive_tire_width_raises(self):
        with pytest.raises(MalformedComponentError):
            tire_width_mm(0)


# =============================================================================
# Gearing
# =============================================================================

class TestGearing:
    def test_ratio_is_exact_division(self):
        assert calculate_gear_ratio(50, 11) == 50 / 11

    def test_zero_teeth_raises(self):
        with pytest.raises(MalformedComponentError):
            calculate_gear_ratio(50, 0)

    def test_gear_range_is_quotient_not_difference(self):
        assert calculate_gear_range(50 / 11, 34 / 30) == 401

    def test_gear_range_single_gear(self):
        assert calculate_gear_range(2.0, 2.0) == 100

    def test_gear_range_half_rounds_up(self):
        # 9/8 over 9/9 is exactly 112.5
        assert calculate_gear_range(9 / 8, 9 / 9) == 113
        # 44/10 over 32/38 is 522.5 once float noise is dropped
        assert calculate_gear_range(44 / 10, 32 / 38) == 523

    def test_gear_range_below_half_rounds_down(self):
        assert calculate_gear_range(1.124, 1.0) == 112

    def test_speed_kmh(self):
        circumference = math.pi * 672
        expected = (50 / 11) * 90 * circumference * 60 / 1_000_000
        assert calculate_speed(50 / 11, circumference, 90, SpeedUnit.KMH) == pytest.approx(expected)
        assert expected == pytest.approx(51.82, abs=0.01)

    def test_speed_mph_is_scaled_kmh(self):
        circumference = math.pi * 672
        kmh = calculate_speed(3.0, circumference, 90, SpeedUnit.KMH)
        mph = calculate_speed(3.0, circumference, 90, SpeedUnit.MPH)
        assert mph == pytest.approx(kmh * KMH_TO_MPH)

    def test_speed_scales_with_cadence(self):
        circumference = math.pi * 672
        assert calculate_speed(3.0, circumference, 100) == pytest.approx(
            2 * calculate_speed(3.0, circumference, 50)
        )

    def test_gear_inches(self):
        assert calculate_gear_inches(50 / 11, "700c", 25) == pytest.approx(50 / 11 * 672 / 25.4)

    def test_tooth_spread_ignores_order(self):
        assert tooth_spread([34, 50]) == 16
        assert tooth_spread((50, 34)) == 16


# =============================================================================
# Converters
# =============================================================================

class TestConverters:
    def test_to_number(self):
        assert to_number(" 25 ") == 25.0
        assert to_number(7) == 7.0
        assert to_number("abc") is None
        assert to_number("") is None
        assert to_number(True) is None
        assert to_number(float("nan")) is None
        assert to_number("inf") is None

    def test_parse_speed_count(self):
        assert parse_speed_count("11-speed") == 11
        assert parse_speed_count("10/11-speed") == 11
        assert parse_speed_count(12) == 12
        assert parse_speed_count("12") == 12
        assert parse_speed_count("Di2") is None
        assert parse_speed_count(None) is None
