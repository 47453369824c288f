"""Bike-fit geometry tests. All lengths in mm."""

import pytest

from cranksmith.core.enums import Experience, Flexibility, MeasurementField, MeasurementUnits, RidingStyle
from cranksmith.models.bike_fit import BodyMeasurements
from cranksmith.services.bike_fit import (
    compute_bike_fit,
    parse_measurement,
    to_display_units,
    update_measurement,
)


@pytest.fixture
def rider() -> BodyMeasurements:
    return BodyMeasurements(inseam=800, torso=600, arm_length=650)


class TestComputeBikeFit:
    def test_saddle_heights(self, rider):
        fit = compute_bike_fit(rider)
        assert fit.saddle_height.lemond == pytest.approx(706.4)
        assert fit.saddle_height.holmes == pytest.approx(708.0)
        assert fit.saddle_height.hamley == pytest.approx(872.0)
        assert fit.saddle_height.competitive == pytest.approx(700.0)

    def test_reach_with_defaults(self, rider):
        # (600 × 0.47 + 650 × 0.15) × average 1.00 × endurance 0.95
        assert compute_bike_fit(rider).reach == pytest.approx(360.525)

    def test_stack_with_defaults(self, rider):
        # 600 × 0.48 × average 1.08 × endurance 1.10 × intermediate 1.05
        assert compute_bike_fit(rider).stack == pytest.approx(359.2512)

    def test_handlebar_drop_offsets(self, rider):
        fit = compute_bike_fit(rider)
        assert fit.handlebar_drop.comfort == pytest.approx(fit.stack - 20)
        assert fit.handlebar_drop.sport == pytest.approx(fit.stack - 40)
        assert fit.handlebar_drop.aggressive == pytest.approx(fit.stack - 60)

    def test_flexible_racer_reaches_further_and_sits_lower(self, rider):
        racer = rider.model_copy(
            update={
                "flexibility": Flexibility.HIGH,
                "riding_style": RidingStyle.RACING,
                "experience": Experience.PROFESSIONAL,
            }
        )
        base_fit = compute_bike_fit(rider)
        racer_fit = compute_bike_fit(racer)
        assert racer_fit.reach > base_fit.reach
        assert racer_fit.stack < base_fit.stack
        assert racer_fit.reach == pytest.approx(379.5 * 1.08 * 1.08)
        assert racer_fit.stack == pytest.approx(600 * 0.48 * 1.00 * 0.85 * 0.95)

    def test_units_do_not_change_results(self, rider):
        imperial = rider.model_copy(update={"units": MeasurementUnits.IMPERIAL})
        assert compute_bike_fit(imperial) == compute_bike_fit(rider)

    def test_missing_torso_is_no_result(self):
        assert compute_bike_fit(BodyMeasurements(inseam=800, arm_length=650)) is None

    def test_zero_measurement_is_no_result(self):
        assert compute_bike_fit(BodyMeasurements(inseam=800, torso=0, arm_length=650)) is None

    def test_empty_is_no_result(self):
        assert compute_bike_fit(BodyMeasurements()) is None


class TestParseMeasurement:
    def test_metric_centimeters(self):
        result = parse_measurement("80", MeasurementField.INSEAM, MeasurementUnits.METRIC)
        assert result.is_valid
        assert result.sanitized == pytest.approx(800)

    def test_imperial_inches(self):
        result = parse_measurement("32", "inseam", "imperial")
        assert result.sanitized == pytest.approx(812.8)

    def test_not_a_number(self):
        result = parse_measurement("abc", "torso")
        assert result.errors == ["Torso length must be a valid number"]
        assert result.sanitized is None

    def test_out_of_range(self):
        assert parse_measurement("10", "inseam").errors == ["Inseam must be between 250 and 1200 mm"]
        assert parse_measurement("100", "arm_length").errors == ["Arm length must be between 200 and 950 mm"]

    def test_range_bounds_inclusive(self):
        assert parse_measurement("20", "torso").is_valid
        assert parse_measurement("85", "torso").is_valid
        assert not parse_measurement("85.1", "torso").is_valid

    def test_blank_clears(self):
        result = parse_measurement("  ", "inseam")
        assert result.is_valid
        assert result.sanitized is None


class TestUpdateMeasurement:
    def test_valid_input_is_stored_in_mm(self):
        updated, result = update_measurement(BodyMeasurements(), "torso", "60")
        assert result.is_valid
        assert updated.torso == pytest.approx(600)

    def test_imperial_input(self):
        measurements = BodyMeasurements(units=MeasurementUnits.IMPERIAL)
        updated, _ = update_measurement(measurements, MeasurementField.ARM_LENGTH, "25")
        assert updated.arm_length == pytest.approx(635)

    def test_rejected_input_keeps_previous_value(self, rider):
        updated, result = update_measurement(rider, "inseam", "500")
        assert not result.is_valid
        assert updated.inseam == 800

    def test_original_is_not_mutated(self, rider):
        update_measurement(rider, "inseam", "85")
        assert rider.inseam == 800


class TestDisplayUnits:
    def test_to_inches(self):
        assert to_display_units(812.8, MeasurementUnits.IMPERIAL) == pytest.approx(32)

    def test_to_centimeters(self):
        assert to_display_units(800, "metric") == pytest.approx(80)

    def test_display_does_not_feed_back(self, rider):
        shown = round(to_display_units(rider.inseam, "imperial"), 1)
        assert shown == 31.5
        assert rider.inseam == 800
