"""Drivetrain and wheel calculations.

This module is the single source of truth for all gearing math.

## Core Formulas

### Rolling circumference
    circumference_mm = pi × (rim_diameter_mm + 2 × tire_width_mm)

The tire width stands in for the added radius. This is a simplification,
not a tread-to-tread measurement.

### Gear ratio
    ratio = chainring_teeth / cog_teeth

### Speed at cadence
    mm_per_minute = ratio × cadence_rpm × circumference_mm
    speed_kmh = mm_per_minute × 60 / 1_000_000
    speed_mph = speed_kmh × 0.621371

### Gear inches
    gear_inches = ratio × (rim_diameter_mm + 2 × tire_width_mm) / 25.4

### Gear range
    gear_range_pct = round(high_ratio / low_ratio × 100)

Sources:
- ISO 5775 bead seat diameters (622, 584, 559)
- Sheldon Brown gear-inch definitions
"""

import math

from ..core.enums import SpeedUnit
from ..core.exceptions import MalformedComponentError

# =============================================================================
# CONSTANTS
# =============================================================================

MM_PER_INCH = 25.4
MM_TO_KM = 1e-6
MINUTES_PER_HOUR = 60
KMH_TO_MPH = 0.621371

DEFAULT_CADENCE_RPM = 90

# Fixed allowances added to every setup weight (grams)
CHAIN_WEIGHT_GRAMS = 257
DERAILLEUR_WEIGHT_GRAMS = 232

# ISO bead seat diameter (mm) by wheel size label
WHEEL_SIZES: dict[str, int] = {
    "700c": 622,
    "650b": 584,
    "26-inch": 559,
    "27.5-inch": 584,
    "29-inch": 622,
}

# Tire widths at or below this are inch-denominated (e.g. 2.35" MTB tires)
MAX_INCH_TIRE_WIDTH = 5.0


# =============================================================================
# WHEEL
# =============================================================================

def get_rim_diameter(wheel_size: str) -> int:
    """Look up the bead seat diameter for a wheel size label.

    Raises:
        MalformedComponentError: the label is not in WHEEL_SIZES
    """
    try:
        return WHEEL_SIZES[wheel_size]
    except KeyError:
        raise MalformedComponentError(f"Invalid wheel size: {wheel_size}") from None


def tire_width_mm(tire_width: float) -> float:
    """Normalize a tire width to millimeters.

    Examples:
        >>> tire_width_mm(25)
        25.0
        >>> round(tire_width_mm(2.35), 2)
        59.69
    """
    width = float(tire_width)
    if width <= 0:
        raise MalformedComponentError(f"Tire width must be positive, got {tire_width}")
    if width <= MAX_INCH_TIRE_WIDTH:
        return width * MM_PER_INCH
    return width


def calculate_wheel_diameter(wheel_size: str, tire_width: float) -> float:
    """Outer wheel diameter in mm: rim plus tire on both sides."""
    return get_rim_diameter(wheel_size) + 2 * tire_width_mm(tire_width)


def calculate_wheel_circumference(wheel_size: str, tire_width: float) -> float:
    """Rolling circumference in mm.

    Example:
        >>> round(calculate_wheel_circumference("700c", 25), 1)
        2111.2
    """
    return math.pi * calculate_wheel_diameter(wheel_size, tire_width)


# =============================================================================
# GEARING
# =============================================================================

def calculate_gear_ratio(chainring_teeth: int, cog_teeth: int) -> float:
    """Chainring teeth over cog teeth (exact division)."""
    if chainring_teeth <= 0 or cog_teeth <= 0:
        raise MalformedComponentError(
            f"Tooth counts must be positive, got {chainring_teeth}/{cog_teeth}"
        )
    return chainring_teeth / cog_teeth


def calculate_speed(
    gear_ratio: float,
    circumference_mm: float,
    cadence_rpm: float = DEFAULT_CADENCE_RPM,
    unit: SpeedUnit = SpeedUnit.KMH,
) -> float:
    """Road speed for a gear ratio at a cadence. Not rounded.

    Example:
        >>> round(calculate_speed(50 / 11, 2111.15, 90, SpeedUnit.KMH), 1)
        51.8
    """
    mm_per_minute = gear_ratio * cadence_rpm * circumference_mm
    speed_kmh = mm_per_minute * MINUTES_PER_HOUR * MM_TO_KM
    if unit == SpeedUnit.MPH:
        return speed_kmh * KMH_TO_MPH
    return speed_kmh


def calculate_gear_inches(gear_ratio: float, wheel_size: str, tire_width: float) -> float:
    """Traditional gear-inch figure for a ratio on a given wheel."""
    return gear_ratio * calculate_wheel_diameter(wheel_size, tire_width) / MM_PER_INCH


def calculate_gear_range(high_ratio: float, low_ratio: float) -> int:
    """How wide the top gear is relative to the bottom, as a whole percent.

    This is high/low × 100, not high − low. Halves round up.

    Example:
        >>> calculate_gear_range(50 / 11, 34 / 30)
        401
        >>> calculate_gear_range(9 / 8, 9 / 9)
        113
    """
    percent = high_ratio / low_ratio * 100
    # Drop float noise first so an exact .5 tie is not read as .4999...
    return math.floor(round(percent, 9) + 0.5)


def tooth_spread(teeth: tuple[int, ...] | list[int]) -> int:
    """Difference between the largest and smallest tooth count."""
    return max(teeth) - min(teeth)
