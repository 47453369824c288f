"""Current vs proposed setup comparison.

Deltas are always ``proposed - current``. Polarity differs per figure:
lower weight is better, higher top speed and gear range are better.
"""

import logging

from ..core.enums import ChangeKind, UpgradeVerdict
from ..models.results import ComparisonResult, ComparisonVerdict, ComputedSetup

logger = logging.getLogger(__name__)

# Changes smaller than these are noise, not improvements or drawbacks
WEIGHT_NOTABLE_GRAMS = 10
SPEED_NOTABLE = 0.3
RANGE_NOTABLE = 20

# Any single change this large makes the upgrade worthwhile on its own
WEIGHT_SIGNIFICANT_GRAMS = 50
SPEED_SIGNIFICANT = 1
RANGE_SIGNIFICANT = 50


def summarize_changes(weight_change: float, speed_change: float, range_change: int) -> ComparisonVerdict:
    """Classify signed deltas into improvements, drawbacks and a verdict."""
    improvements: list[ChangeKind] = []
    drawbacks: list[ChangeKind] = []

    if weight_change < -WEIGHT_NOTABLE_GRAMS:
        improvements.append(ChangeKind.WEIGHT_SAVED)
    elif weight_change > WEIGHT_NOTABLE_GRAMS:
        drawbacks.append(ChangeKind.WEIGHT_ADDED)

    if speed_change > SPEED_NOTABLE:
        improvements.append(ChangeKind.SPEED_GAINED)
    elif speed_change < -SPEED_NOTABLE:
        drawbacks.append(ChangeKind.SPEED_LOST)

    if range_change > RANGE_NOTABLE:
        improvements.append(ChangeKind.RANGE_ADDED)
    elif range_change < -RANGE_NOTABLE:
        drawbacks.append(ChangeKind.RANGE_REDUCED)

    if not improvements and not drawbacks:
        verdict = UpgradeVerdict.SIMILAR
    elif (
        len(improvements) >= 2
        or weight_change < -WEIGHT_SIGNIFICANT_GRAMS
        or speed_change > SPEED_SIGNIFICANT
        or range_change > RANGE_SIGNIFICANT
    ):
        verdict = UpgradeVerdict.WORTH_UPGRADE
    elif improvements:
        verdict = UpgradeVerdict.MINOR_IMPROVEMENT
    else:
        verdict = UpgradeVerdict.NOT_RECOMMENDED

    return ComparisonVerdict(improvements=improvements, drawbacks=drawbacks, verdict=verdict)


def compare_setups(current: ComputedSetup, proposed: ComputedSetup) -> ComparisonResult:
    """Signed deltas between two computed setups.

    Both setups must have been computed in the same speed unit; the speed
    delta is between top-end (``high_speed``) figures.
    """
    if current.speed_unit != proposed.speed_unit:
        raise ValueError(
            f"Cannot compare speeds in {current.speed_unit.value} and {proposed.speed_unit.value}"
        )

    weight_change = proposed.total_weight - current.total_weight
    speed_change = proposed.metrics.high_speed - current.metrics.high_speed
    range_change = proposed.gear_range - current.gear_range

    verdict = summarize_changes(weight_change, speed_change, range_change)
    logger.debug(
        "Comparison: weight=%+.1fg speed=%+.2f%s range=%+d -> %s",
        weight_change,
        speed_change,
        proposed.speed_unit.value,
        range_change,
        verdict.verdict.value,
    )

    return ComparisonResult(
        weight_change=weight_change,
        speed_change=speed_change,
        range_change=range_change,
        speed_unit=proposed.speed_unit,
        verdict=verdict,
    )
