"""Bike-fit geometry from body measurements.

Formulas (all lengths in mm):

    saddle height   = inseam × {lemond 0.883, holmes 0.885, hamley 1.09,
                                competitive 0.875}
    reach           = (torso × 0.47 + arm × 0.15) × flexibility × style
    stack           = torso × 0.48 × flexibility' × style' × experience
    handlebar drop  = stack − {comfort 20, sport 40, aggressive 60}

Reach and stack use separate flexibility and style tables: a flexible rider
reaches further but sits lower.

Measurements are stored in millimeters. Text input is converted from the
display units (inches or centimeters) and range-checked before storage;
display rounding never feeds back into the stored value.
"""

import logging
from typing import Any

from ..core.enums import Experience, Flexibility, MeasurementField, MeasurementUnits, RidingStyle
from ..models.bike_fit import BikeFitResult, BodyMeasurements, HandlebarDrop, SaddleHeights
from ..models.results import ValidationResult
from ..utils.converters import is_blank, to_number
from ..utils.drivetrain_math import MM_PER_INCH

logger = logging.getLogger(__name__)

MM_PER_CM = 10

SADDLE_HEIGHT_FACTORS = {
    "lemond": 0.883,
    "holmes": 0.885,
    "hamley": 1.09,
    "competitive": 0.875,
}

REACH_TORSO_FACTOR = 0.47
REACH_ARM_FACTOR = 0.15
STACK_TORSO_FACTOR = 0.48

REACH_FLEXIBILITY = {
    Flexibility.LOW: 0.92,
    Flexibility.AVERAGE: 1.00,
    Flexibility.HIGH: 1.08,
}
REACH_STYLE = {
    RidingStyle.COMFORT: 0.90,
    RidingStyle.ENDURANCE: 0.95,
    RidingStyle.SPORT: 1.00,
    RidingStyle.AGGRESSIVE: 1.05,
    RidingStyle.RACING: 1.08,
}

STACK_FLEXIBILITY = {
    Flexibility.LOW: 1.15,
    Flexibility.AVERAGE: 1.08,
    Flexibility.HIGH: 1.00,
}
STACK_STYLE = {
    RidingStyle.COMFORT: 1.20,
    RidingStyle.ENDURANCE: 1.10,
    RidingStyle.SPORT: 1.00,
    RidingStyle.AGGRESSIVE: 0.92,
    RidingStyle.RACING: 0.85,
}
STACK_EXPERIENCE = {
    Experience.BEGINNER: 1.10,
    Experience.INTERMEDIATE: 1.05,
    Experience.ADVANCED: 1.00,
    Experience.PROFESSIONAL: 0.95,
}

HANDLEBAR_DROP_OFFSETS = {
    "comfort": 20,
    "sport": 40,
    "aggressive": 60,
}

# Realistic ranges, mm
MEASUREMENT_RANGES: dict[MeasurementField, tuple[float, float]] = {
    MeasurementField.INSEAM: (250, 1200),
    MeasurementField.TORSO: (200, 850),
    MeasurementField.ARM_LENGTH: (200, 950),
}

_FIELD_LABELS = {
    MeasurementField.INSEAM: "Inseam",
    MeasurementField.TORSO: "Torso length",
    MeasurementField.ARM_LENGTH: "Arm length",
}


def _is_present(value: float | None) -> bool:
    return value is not None and value > 0


def compute_bike_fit(measurements: BodyMeasurements) -> BikeFitResult | None:
    """Fit recommendations, or None until all three lengths are entered.

    Missing input is the normal state of a half-filled form, so it is not
    an error.
    """
    inseam = measurements.inseam
    torso = measurements.torso
    arm = measurements.arm_length
    if not (_is_present(inseam) and _is_present(torso) and _is_present(arm)):
        return None

    saddle = SaddleHeights(**{name: inseam * factor for name, factor in SADDLE_HEIGHT_FACTORS.items()})

    reach = (
        (torso * REACH_TORSO_FACTOR + arm * REACH_ARM_FACTOR)
        * REACH_FLEXIBILITY[measurements.flexibility]
        * REACH_STYLE[measurements.riding_style]
    )
    stack = (
        torso
        * STACK_TORSO_FACTOR
        * STACK_FLEXIBILITY[measurements.flexibility]
        * STACK_STYLE[measurements.riding_style]
        * STACK_EXPERIENCE[measurements.experience]
    )
    drop = HandlebarDrop(**{name: stack - offset for name, offset in HANDLEBAR_DROP_OFFSETS.items()})

    logger.debug("Bike fit: inseam=%.1f torso=%.1f arm=%.1f -> reach=%.1f stack=%.1f", inseam, torso, arm, reach, stack)
    return BikeFitResult(saddle_height=saddle, reach=reach, stack=stack, handlebar_drop=drop)


def to_millimeters(value: float, units: MeasurementUnits | str) -> float:
    """Convert a display-unit length (inches or centimeters) to mm."""
    if MeasurementUnits(units) == MeasurementUnits.IMPERIAL:
        return value * MM_PER_INCH
    return value * MM_PER_CM


def to_display_units(mm: float, units: MeasurementUnits | str) -> float:
    """Convert a stored mm length to inches or centimeters, unrounded."""
    if MeasurementUnits(units) == MeasurementUnits.IMPERIAL:
        return mm / MM_PER_INCH
    return mm / MM_PER_CM


def parse_measurement(
    raw: Any,
    field: MeasurementField | str,
    units: MeasurementUnits | str = MeasurementUnits.METRIC,
) -> ValidationResult:
    """Parse one text entry into a range-checked mm value.

    Blank input is valid and sanitizes to None (the field was cleared).
    """
    field = MeasurementField(field)
    label = _FIELD_LABELS[field]

    if is_blank(raw):
        return ValidationResult.ok(None)

    value = to_number(raw)
    if value is None:
        return ValidationResult.fail(f"{label} must be a valid number")

    mm = to_millimeters(value, units)
    low, high = MEASUREMENT_RANGES[field]
    if mm < low or mm > high:
        return ValidationResult.fail(f"{label} must be between {low} and {high} mm")

    return ValidationResult.ok(mm)


def update_measurement(
    measurements: BodyMeasurements,
    field: MeasurementField | str,
    raw: Any,
) -> tuple[BodyMeasurements, ValidationResult]:
    """Apply one text entry to a measurement set.

    Rejected input leaves the stored value unchanged.
    """
    field = MeasurementField(field)
    result = parse_measurement(raw, field, measurements.units)
    if not result.is_valid:
        logger.info("Rejected %s input %r: %s", field.value, raw, "; ".join(result.errors))
        return measurements, result
    return measurements.model_copy(update={field.value: result.sanitized}), result
