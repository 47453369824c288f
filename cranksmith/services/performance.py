"""Current vs proposed upgrade analysis.

Runs the whole engine for one comparison session:

1. Resolve speed unit, cadence and log level once (arguments, else settings)
2. Validate both setups against the bike type
3. Compute both setups with the same unit and cadence
4. Check the proposed setup's compatibility against the current one
5. Compare the two
"""

import logging
from typing import Any

from ..core.config import Settings, get_settings, resolve_speed_unit
from ..core.enums import SpeedUnit
from ..core.exceptions import CrankSmithError
from ..core.logging import log_error, setup_logging
from ..models.results import UpgradeAnalysis
from .comparison import compare_setups
from .compatibility import check_compatibility
from .gearing import compute_setup
from .validation import validate_setup

logger = logging.getLogger(__name__)


def analyze_upgrade(
    current: Any,
    proposed: Any,
    bike_type: Any,
    *,
    speed_unit: SpeedUnit | str | None = None,
    cadence_rpm: float | None = None,
    settings: Settings | None = None,
) -> UpgradeAnalysis | None:
    """Compare a current setup with a proposed one.

    Returns None while either setup is still incomplete (not an error: the
    user is still choosing parts). Invalid input comes back as an analysis
    with ``is_valid=False`` and the collected errors.

    Raises:
        ValueError: unknown speed unit or non-positive cadence
        CrankSmithError: validated data the calculator still cannot use
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    unit = resolve_speed_unit(speed_unit, settings)
    cadence = cadence_rpm if cadence_rpm is not None else settings.cadence_rpm

    errors: list[str] = []
    current_check = validate_setup(current, bike_type)
    errors.extend(f"Current setup: {e}" for e in current_check.errors)
    proposed_check = validate_setup(proposed, bike_type)
    errors.extend(f"Proposed setup: {e}" for e in proposed_check.errors)
    if errors:
        return UpgradeAnalysis(is_valid=False, errors=errors, speed_unit=unit)

    current_setup = current_check.sanitized
    proposed_setup = proposed_check.sanitized
    if not (current_setup.is_complete and proposed_setup.is_complete):
        logger.debug(
            "Upgrade analysis skipped, missing current=%s proposed=%s",
            current_setup.missing_fields(),
            proposed_setup.missing_fields(),
        )
        return None

    try:
        current_computed = compute_setup(current_setup, cadence, unit, bike_type)
        proposed_computed = compute_setup(proposed_setup, cadence, unit, bike_type)
    except CrankSmithError as e:
        log_error("Upgrade analysis failed", e, bike_type=bike_type)
        raise

    compatibility = check_compatibility(
        proposed_computed,
        proposed_setup,
        bike_type=bike_type,
        current_setup=current_setup,
    )
    comparison = compare_setups(current_computed, proposed_computed)

    logger.info(
        "Upgrade analysis %s -> %s: %s, %s",
        current_setup.cassette.id,
        proposed_setup.cassette.id,
        compatibility.status.value,
        comparison.verdict.verdict.value,
    )
    return UpgradeAnalysis(
        is_valid=True,
        current=current_computed,
        proposed=proposed_computed,
        compatibility=compatibility,
        comparison=comparison,
        speed_unit=unit,
    )
