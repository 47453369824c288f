"""Gear ratio and speed calculator.

For every (chainring, cog) pair of a complete setup this derives the ratio,
gear inches, speed at a reference cadence and a usage class, then
summarizes the setup:

    high_ratio / low_ratio: max / min ratio over all pairs
    high_speed / low_speed: speeds at those ratios
    gear_range            : high_ratio / low_ratio × 100, halves rounded up
    total_weight          : crankset + cassette + chain + derailleur

Nothing is rounded here; display rounding belongs to the caller.
"""

import logging

from ..core.config import resolve_speed_unit
from ..core.enums import BikeType, GearClass, SpeedUnit
from ..core.exceptions import IncompleteSetupError, MalformedComponentError
from ..core.logging import log_calculation
from ..models.component import Component, Setup
from ..models.results import (
    ComputedSetup,
    GearOverlap,
    GearPairResult,
    GearRatioAnalysis,
    SetupMetrics,
)
from ..utils.drivetrain_math import (
    CHAIN_WEIGHT_GRAMS,
    DEFAULT_CADENCE_RPM,
    DERAILLEUR_WEIGHT_GRAMS,
    calculate_gear_inches,
    calculate_gear_range,
    calculate_gear_ratio,
    calculate_speed,
    calculate_wheel_circumference,
)

logger = logging.getLogger(__name__)

# Ratio below "climbing" is a climbing gear, above "sprint" a sprint gear
GEAR_CLASS_THRESHOLDS: dict[BikeType, dict[str, float]] = {
    BikeType.ROAD: {"climbing": 2.5, "sprint": 4.0},
    BikeType.GRAVEL: {"climbing": 2.0, "sprint": 3.5},
    BikeType.MTB: {"climbing": 1.5, "sprint": 2.5},
}

# Two ratios closer than this count as duplicated gears
GEAR_OVERLAP_TOLERANCE = 0.1
GEAR_OVERLAP_WARNING_PCT = 30


def classify_gear(ratio: float, bike_type: BikeType | str | None = None) -> GearClass:
    """Put a ratio in the climbing / all-around / sprint band for a bike type."""
    parsed = BikeType.from_string(bike_type) if bike_type else None
    thresholds = GEAR_CLASS_THRESHOLDS[parsed or BikeType.ROAD]
    if ratio < thresholds["climbing"]:
        return GearClass.CLIMBING
    if ratio > thresholds["sprint"]:
        return GearClass.SPRINT
    return GearClass.ALL_AROUND


def _require_teeth(component: Component, role: str) -> tuple[int, ...]:
    if not component.teeth:
        raise IncompleteSetupError([f"{role}.teeth"])
    if any(t <= 0 for t in component.teeth):
        raise MalformedComponentError(f"{role} {component.id} has non-positive tooth counts")
    return component.teeth


def compute_setup(
    setup: Setup,
    cadence_rpm: float = DEFAULT_CADENCE_RPM,
    speed_unit: SpeedUnit | str | None = None,
    bike_type: BikeType | str | None = None,
) -> ComputedSetup:
    """Compute every gear and the summary metrics for a complete setup.

    The setup must already have passed validation; this only guards against
    data that should never get here.

    Args:
        setup: Complete setup (wheel, tire, crankset, cassette)
        cadence_rpm: Reference pedaling rate for the speed figures
        speed_unit: Unit for every speed in the result (configured unit if omitted)
        bike_type: Selects the gear classification bands (road if omitted)

    Raises:
        IncompleteSetupError: a slot or the tooth data is missing
        MalformedComponentError: zero/negative teeth or an unknown wheel size
    """
    missing = setup.missing_fields()
    if missing:
        raise IncompleteSetupError(missing)
    if cadence_rpm <= 0:
        raise ValueError(f"cadence_rpm must be positive, got {cadence_rpm}")
    speed_unit = resolve_speed_unit(speed_unit)

    chainrings = _require_teeth(setup.crankset, "crankset")
    cogs = _require_teeth(setup.cassette, "cassette")
    circumference = calculate_wheel_circumference(setup.wheel, setup.tire)

    gears: list[GearPairResult] = []
    for chainring in chainrings:
        for cog in cogs:
            ratio = calculate_gear_ratio(chainring, cog)
            gears.append(
                GearPairResult(
                    chainring=chainring,
                    cog=cog,
                    ratio=ratio,
                    gear_inches=calculate_gear_inches(ratio, setup.wheel, setup.tire),
                    speed=calculate_speed(ratio, circumference, cadence_rpm, speed_unit),
                    classification=classify_gear(ratio, bike_type),
                )
            )

    # First pair wins ties; only the ratio value is meaningful
    high = max(gears, key=lambda g: g.ratio)
    low = min(gears, key=lambda g: g.ratio)

    total_weight = (
        setup.crankset.weight
        + setup.cassette.weight
        + CHAIN_WEIGHT_GRAMS
        + DERAILLEUR_WEIGHT_GRAMS
    )

    computed = ComputedSetup(
        gears=tuple(gears),
        total_weight=total_weight,
        metrics=SetupMetrics(
            high_ratio=high.ratio,
            low_ratio=low.ratio,
            high_speed=high.speed,
            low_speed=low.speed,
        ),
        gear_range=calculate_gear_range(high.ratio, low.ratio),
        speed_unit=speed_unit,
        cadence_rpm=cadence_rpm,
        wheel_circumference_mm=circumference,
    )
    log_calculation(
        "compute_setup",
        crankset=setup.crankset.id,
        cassette=setup.cassette.id,
        gears=len(gears),
        gear_range=computed.gear_range,
    )
    return computed


def analyze_gear_overlap(chainrings: tuple[int, ...] | list[int], cogs: tuple[int, ...] | list[int]) -> GearOverlap:
    """Find duplicated ratios between the two rings of a 2x drivetrain.

    A small-ring gear overlaps when some other cog on the big ring gives a
    ratio within GEAR_OVERLAP_TOLERANCE. The percentage is taken over all
    2 × cog-count combinations.
    """
    if len(chainrings) != 2:
        return GearOverlap(percentage=0)

    small_ring, big_ring = sorted(chainrings)
    overlaps: list[tuple[int, int, int, int]] = []
    for cog in cogs:
        for other_cog in cogs:
            if cog == other_cog:
                continue
            if abs(small_ring / cog - big_ring / other_cog) < GEAR_OVERLAP_TOLERANCE:
                overlaps.append((small_ring, cog, big_ring, other_cog))

    percentage = round(len(overlaps) / (len(cogs) * 2) * 100)
    return GearOverlap(percentage=percentage, overlaps=overlaps)


def _bike_type_recommendations(
    bike_type: BikeType, min_ratio: float, max_ratio: float, ratio_spread: float
) -> tuple[list[str], list[str]]:
    warnings: list[str] = []
    suggestions: list[str] = []

    if bike_type == BikeType.ROAD:
        if min_ratio > 1.5:
            warnings.append("May struggle on steep climbs (consider lower gearing)")
            suggestions.append("Add larger cassette or compact crankset for better climbing")
        if max_ratio < 3.5:
            warnings.append("Limited top speed potential")
            suggestions.append("Consider larger chainrings for higher top speed")
        if ratio_spread > 4.5:
            suggestions.append("Excellent gear range for varied terrain")
    elif bike_type == BikeType.GRAVEL:
        if min_ratio > 1.2:
            warnings.append("May need easier gears for loose/steep gravel climbs")
            suggestions.append("Consider wider range cassette (11-42T or larger)")
        if ratio_spread < 3.5:
            warnings.append("Limited gear range for adventure riding")
            suggestions.append("Gravel benefits from wide gear range for varied terrain")
        suggestions.append("Setup well-suited for mixed terrain adventure riding")
    elif bike_type == BikeType.MTB:
        if min_ratio > 1.0:
            warnings.append("May need easier gears for technical climbs")
            suggestions.append("Consider larger cassette (10-50T+) for steep technical terrain")
        if max_ratio > 3.0:
            suggestions.append("Good top-end for XC racing and fire roads")
        suggestions.append("Mountain bike gearing optimized for trail efficiency")

    return warnings, suggestions


def analyze_gear_ratios(setup: Setup, bike_type: BikeType | str) -> GearRatioAnalysis | None:
    """Judge a setup's ratio span for the riding a bike type is meant for.

    Returns None until both crankset and cassette are chosen.
    """
    if setup.crankset is None or setup.cassette is None:
        return None

    chainrings = setup.crankset.teeth
    cogs = setup.cassette.teeth
    ratios = [calculate_gear_ratio(c, g) for c in chainrings for g in cogs]
    min_ratio = min(ratios)
    max_ratio = max(ratios)
    ratio_spread = max_ratio / min_ratio

    parsed = BikeType.from_string(bike_type)
    warnings, recommendations = (
        _bike_type_recommendations(parsed, min_ratio, max_ratio, ratio_spread) if parsed else ([], [])
    )

    overlap = None
    if len(chainrings) == 2:
        overlap = analyze_gear_overlap(chainrings, cogs)
        if overlap.percentage > GEAR_OVERLAP_WARNING_PCT:
            warnings.append(f"{overlap.percentage}% gear overlap between chainrings")
            recommendations.append("Consider 1x drivetrain for simpler shifting")

    logger.debug(
        "Gear ratio analysis %s: %.2f-%.2f, %d warnings",
        parsed.value if parsed else bike_type,
        min_ratio,
        max_ratio,
        len(warnings),
    )
    return GearRatioAnalysis(
        min_ratio=min_ratio,
        max_ratio=max_ratio,
        ratio_spread=ratio_spread,
        total_gears=len(ratios),
        warnings=warnings,
        recommendations=recommendations,
        overlap=overlap,
    )
