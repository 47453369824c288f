"""Mechanical compatibility checks for a proposed drivetrain.

Two levels are provided:

``check_compatibility``: the headline status used to color results. Rules
are applied independently and every finding is kept:

    max cog > LONG_CAGE_COG_THRESHOLD            → warning (long-cage derailleur)
    max cog > derailleur max cog for bike type   → issue (too large)
    crank spread > CHAIN_LINE_CRANK_SPREAD_THRESHOLD
        and cassette spread > CHAIN_LINE_CASSETTE_SPREAD_THRESHOLD
                                                 → warning (chain line)
    current cassette speeds != proposed speeds   → issue (speed mismatch)

``analyze_drivetrain``: per-rule breakdown (cage capacity, speeds, chain
line, chain length) with action items.

Status is always: error if any issue, else warning if any warning, else
compatible.
"""

import logging

from ..core.enums import BikeType, CompatibilityStatus
from ..models.component import Setup
from ..models.results import (
    CompatibilityResult,
    ComputedSetup,
    DrivetrainAnalysis,
    DrivetrainChecks,
)
from ..utils.drivetrain_math import tooth_spread

logger = logging.getLogger(__name__)

# =============================================================================
# POLICY CONSTANTS (single source of truth for thresholds)
# =============================================================================

# Largest cog a standard-cage derailleur is comfortable with
LONG_CAGE_COG_THRESHOLD = 36

# Largest cog any standard derailleur takes, when no bike type is known
STANDARD_DERAILLEUR_MAX_COG = 40

# Per bike type ceiling for the "too large" issue
DERAILLEUR_MAX_COG_BY_BIKE_TYPE: dict[BikeType, int] = {
    BikeType.ROAD: 40,
    BikeType.GRAVEL: 50,
    BikeType.MTB: 52,
}

# Chain line rule. The cassette threshold is compared against a tooth-count
# spread although 400 reads like a percentage; kept as-is pending a domain
# decision on what it was meant to measure.
CHAIN_LINE_CRANK_SPREAD_THRESHOLD = 20
CHAIN_LINE_CASSETTE_SPREAD_THRESHOLD = 400

LONG_CAGE_WARNING = "Large cassette may require long-cage derailleur"
TOO_LARGE_ISSUE = "Cassette too large for standard derailleurs"
CHAIN_LINE_WARNING = "Wide range setup may have chain line issues"

# Derailleur cage limits by bike type, smallest cage first
DERAILLEUR_LIMITS: dict[BikeType, dict[str, dict[str, int]]] = {
    BikeType.ROAD: {
        "short_cage": {"max_capacity": 29, "max_cog": 32},
        "medium_cage": {"max_capacity": 35, "max_cog": 36},
        "long_cage": {"max_capacity": 41, "max_cog": 42},
    },
    BikeType.GRAVEL: {
        "medium_cage": {"max_capacity": 35, "max_cog": 42},
        "long_cage": {"max_capacity": 41, "max_cog": 50},
    },
    BikeType.MTB: {
        "medium_cage": {"max_capacity": 35, "max_cog": 46},
        "long_cage": {"max_capacity": 41, "max_cog": 52},
        "extra_long_cage": {"max_capacity": 47, "max_cog": 52},
    },
}

# 2x extreme-gear ratios outside these bounds cross-chain badly
CROSS_CHAIN_BIG_BIG_MIN_RATIO = 1.5
CROSS_CHAIN_SMALL_SMALL_MAX_RATIO = 3.5
ONE_BY_MAX_CASSETTE_RANGE = 5
CHAIN_LENGTH_MAX_COG_2X = 46
MODERN_SPEED_COUNT = 10


def derailleur_max_cog(bike_type: BikeType | str | None = None) -> int:
    """Largest cog allowed before a cassette is flagged as too large."""
    parsed = BikeType.from_string(bike_type) if bike_type else None
    if parsed is None:
        return STANDARD_DERAILLEUR_MAX_COG
    return DERAILLEUR_MAX_COG_BY_BIKE_TYPE[parsed]


def check_compatibility(
    computed: ComputedSetup,
    setup: Setup,
    *,
    bike_type: BikeType | str | None = None,
    current_setup: Setup | None = None,
) -> CompatibilityResult:
    """Headline compatibility of a proposed setup.

    Args:
        computed: Calculator output for the proposed setup
        setup: The proposed setup itself (tooth data)
        bike_type: Picks the derailleur ceiling; generic limit if omitted
        current_setup: When given, cassette speed counts are compared
    """
    issues: list[str] = []
    warnings: list[str] = []

    if setup.crankset is None or setup.cassette is None:
        return CompatibilityResult(status=CompatibilityStatus.COMPATIBLE)

    max_cog = setup.cassette.max_teeth

    if max_cog > LONG_CAGE_COG_THRESHOLD:
        warnings.append(f"{LONG_CAGE_WARNING} ({max_cog}T)")

    ceiling = derailleur_max_cog(bike_type)
    if max_cog > ceiling:
        issues.append(f"{TOO_LARGE_ISSUE} ({max_cog}T, max {ceiling}T)")

    crank_spread = tooth_spread(setup.crankset.teeth)
    cassette_spread = tooth_spread(setup.cassette.teeth)
    if (
        crank_spread > CHAIN_LINE_CRANK_SPREAD_THRESHOLD
        and cassette_spread > CHAIN_LINE_CASSETTE_SPREAD_THRESHOLD
    ):
        warnings.append(CHAIN_LINE_WARNING)

    if current_setup is not None and current_setup.cassette is not None:
        current_speeds = current_setup.cassette.speeds
        proposed_speeds = setup.cassette.speeds
        if current_speeds and proposed_speeds and current_speeds != proposed_speeds:
            issues.append(f"Speed mismatch: {current_speeds}s vs {proposed_speeds}s")

    status = CompatibilityStatus.from_findings(issues, warnings)
    logger.debug(
        "Compatibility %s for gear_range=%s: %d issues, %d warnings",
        status.value,
        computed.gear_range,
        len(issues),
        len(warnings),
    )
    return CompatibilityResult(status=status, issues=issues, warnings=warnings)


# =============================================================================
# DETAILED ANALYSIS
# =============================================================================

def _check_derailleur_capacity(
    setup: Setup,
    bike_type: BikeType,
    critical: list[str],
    minor: list[str],
    actions: list[str],
) -> tuple[bool, str | None, int]:
    crankset, cassette = setup.crankset, setup.cassette
    total_capacity = tooth_spread(crankset.teeth) + tooth_spread(cassette.teeth)
    max_cog = cassette.max_teeth

    recommended_cage = None
    for cage, limit in DERAILLEUR_LIMITS[bike_type].items():
        if total_capacity <= limit["max_capacity"] and max_cog <= limit["max_cog"]:
            recommended_cage = cage
            break

    if recommended_cage is None:
        critical.append(f"Total capacity ({total_capacity}T) exceeds {bike_type.value} derailleur limits")
        actions.append(f"Consider smaller cassette range or different crankset for {bike_type.value} setup")
    elif recommended_cage in ("long_cage", "extra_long_cage"):
        minor.append(f"{recommended_cage.replace('_', '-')} derailleur recommended for this range")

    if bike_type == BikeType.ROAD and max_cog > 36:
        minor.append("Large cassette may require GRX or MTB derailleur for road bikes")
    elif bike_type == BikeType.GRAVEL and max_cog > 50:
        minor.append("Very large cassette - ensure derailleur can handle range")

    return recommended_cage is not None, recommended_cage, total_capacity


def _check_speed_compatibility(
    setup: Setup, critical: list[str], minor: list[str], actions: list[str]
) -> bool:
    crankset_speed = setup.crankset.speeds
    cassette_speed = setup.cassette.speeds

    if not crankset_speed or not cassette_speed:
        minor.append("Speed compatibility cannot be determined - missing speed information")
        actions.append("Verify component speeds match (e.g., both 11-speed)")
        return True

    compatible = crankset_speed == cassette_speed
    if not compatible:
        critical.append(
            f"Speed mismatch: {crankset_speed}-speed crankset with {cassette_speed}-speed cassette"
        )
        actions.append(
            f"Use matching {cassette_speed}-speed crankset or {crankset_speed}-speed cassette"
        )
        if abs(crankset_speed - cassette_speed) == 1:
            actions.append(
                "Components may work with chain and derailleur adjustments "
                "(not recommended for optimal performance)"
            )
    else:
        actions.append(f"{crankset_speed}-speed components are matched")

    if crankset_speed < MODERN_SPEED_COUNT and cassette_speed < MODERN_SPEED_COUNT:
        minor.append("Older drivetrain technology - consider 11-12 speed upgrade")
        actions.append("Modern 11-12 speed drivetrains offer better performance and availability")

    return compatible


def _check_chain_line(setup: Setup, minor: list[str], actions: list[str]) -> bool:
    chainrings = setup.crankset.teeth
    cogs = setup.cassette.teeth
    ok = True

    if len(chainrings) > 1:
        big_big = max(chainrings) / max(cogs)
        small_small = min(chainrings) / min(cogs)
        if big_big < CROSS_CHAIN_BIG_BIG_MIN_RATIO or small_small > CROSS_CHAIN_SMALL_SMALL_MAX_RATIO:
            ok = False
            minor.append("Some gear combinations may cause poor chain line")
            actions.append("Avoid big ring + big cassette and small ring + small cassette combinations")
    else:
        if max(cogs) / min(cogs) > ONE_BY_MAX_CASSETTE_RANGE:
            ok = False
            minor.append("Wide range cassette with 1x may have chain line issues at extremes")
            actions.append("Consider narrow-wide chainring and clutch derailleur for chain retention")
        actions.append("1x drivetrain offers good chain line in middle gears")

    return ok


def _check_chain_length(setup: Setup, minor: list[str], actions: list[str]) -> bool:
    if len(setup.crankset.teeth) > 1 and setup.cassette.max_teeth > CHAIN_LENGTH_MAX_COG_2X:
        minor.append("Wide range setup may require longer chain")
        actions.append("Check chain length when installing")
        return False
    return True


def analyze_drivetrain(setup: Setup, bike_type: BikeType | str) -> DrivetrainAnalysis:
    """Run every detailed compatibility rule for one setup and bike type.

    A setup without both crankset and cassette is reported compatible with
    no findings; there is nothing to check yet. Unknown bike types fall back
    to road limits.
    """
    if setup.crankset is None or setup.cassette is None:
        return DrivetrainAnalysis(status=CompatibilityStatus.COMPATIBLE)

    parsed = BikeType.from_string(bike_type) or BikeType.ROAD
    critical: list[str] = []
    minor: list[str] = []
    actions: list[str] = []

    capacity_ok, cage, total_capacity = _check_derailleur_capacity(
        setup, parsed, critical, minor, actions
    )
    chain_length_ok = _check_chain_length(setup, minor, actions)
    speeds_ok = _check_speed_compatibility(setup, critical, minor, actions)
    chain_line_ok = _check_chain_line(setup, minor, actions)

    return DrivetrainAnalysis(
        status=CompatibilityStatus.from_findings(critical, minor),
        critical_issues=critical,
        minor_warnings=minor,
        action_items=actions,
        checks=DrivetrainChecks(
            derailleur_capacity=capacity_ok,
            chain_length=chain_length_ok,
            speed_compatibility=speeds_ok,
            chain_line=chain_line_ok,
        ),
        recommended_cage=cage,
        total_capacity=total_capacity,
    )
