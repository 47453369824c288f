"""Drivetrain and bike-fit services."""

from .bike_fit import compute_bike_fit, parse_measurement, to_display_units, update_measurement
from .catalog import get_bike_config, get_component, get_components_for_bike_type, get_default_setup
from .comparison import compare_setups
from .compatibility import analyze_drivetrain, check_compatibility
from .gearing import analyze_gear_ratios, compute_setup
from .performance import analyze_upgrade
from .validation import (
    validate_bike_type,
    validate_component,
    validate_numeric,
    validate_setup,
    validate_setup_complete,
)

__all__ = [
    "compute_bike_fit",
    "parse_measurement",
    "update_measurement",
    "to_display_units",
    "get_bike_config",
    "get_component",
    "get_components_for_bike_type",
    "get_default_setup",
    "compare_setups",
    "check_compatibility",
    "analyze_drivetrain",
    "compute_setup",
    "analyze_gear_ratios",
    "analyze_upgrade",
    "validate_numeric",
    "validate_bike_type",
    "validate_component",
    "validate_setup",
    "validate_setup_complete",
]
