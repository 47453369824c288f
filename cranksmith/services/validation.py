"""Validation for raw setup fields and catalog components.

Every validator is a pure function returning a ``ValidationResult``; nothing
here raises for bad user input. ``sanitized`` carries the coerced value
(numbers as int/float, components as ``Component``, setups as ``Setup``) and
is withheld whenever there is at least one error.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..core.enums import BikeType
from ..core.logging import log_validation_failure
from ..models.component import SETUP_SLOTS, Component, Setup
from ..models.results import SetupCompleteness, ValidationResult
from ..utils.converters import is_blank, to_number
from .catalog import BIKE_CONFIG

# Accepted component weight range (grams)
MIN_COMPONENT_WEIGHT = 1
MAX_COMPONENT_WEIGHT = 10000

REQUIRED_COMPONENT_FIELDS = ("id", "model", "weight")


def validate_numeric(
    value: Any,
    *,
    min_value: float | None = None,
    max_value: float | None = None,
    integer: bool = False,
    positive: bool = False,
    required: bool = False,
    field: str = "value",
) -> ValidationResult:
    """Validate a raw numeric input.

    Checks run in order required, numeric, positive, integer, min, max and
    stop at the first failure. Empty input is valid (sanitized None) unless
    ``required``.

    Examples:
        >>> validate_numeric("25", positive=True).sanitized
        25.0
        >>> validate_numeric("2.5", integer=True).errors
        ['value must be a whole number']
    """
    if is_blank(value):
        if required:
            return ValidationResult.fail(f"{field} is required")
        return ValidationResult.ok(None)

    num = to_number(value)
    if num is None:
        return ValidationResult.fail(f"{field} must be a valid number")

    if positive and num <= 0:
        return ValidationResult.fail(f"{field} must be positive")

    if integer and not num.is_integer():
        return ValidationResult.fail(f"{field} must be a whole number")

    if min_value is not None and num < min_value:
        return ValidationResult.fail(f"{field} must be at least {min_value}")

    if max_value is not None and num > max_value:
        return ValidationResult.fail(f"{field} must be no more than {max_value}")

    return ValidationResult.ok(int(num) if integer else num)


def validate_bike_type(bike_type: Any) -> ValidationResult:
    """Validate a bike type name; sanitized is the lowercase key."""
    if not bike_type or not isinstance(bike_type, str):
        return ValidationResult.fail("Bike type is required")

    parsed = BikeType.from_string(bike_type)
    if parsed is None or parsed.value not in BIKE_CONFIG:
        return ValidationResult.fail(f"Bike type must be one of: {', '.join(BIKE_CONFIG)}")

    return ValidationResult.ok(parsed.value)


def _validate_teeth(teeth: Any, role: str) -> list[str]:
    message = f"{role} teeth must be a non-empty list of positive whole numbers"
    if isinstance(teeth, (str, bytes)) or not isinstance(teeth, (list, tuple)) or not teeth:
        return [message]
    for tooth in teeth:
        num = to_number(tooth)
        if num is None or not num.is_integer() or num <= 0:
            return [message]
    return []


def validate_component(component: Any, role: str = "component") -> ValidationResult:
    """Validate an optional crankset or cassette.

    An absent component (None) is valid. A present one needs ``id``,
    ``model`` and ``weight`` (1-10000 g) and usable tooth counts.
    """
    if component is None:
        return ValidationResult.ok(None)

    if isinstance(component, Component):
        data = component.model_dump()
    elif isinstance(component, Mapping):
        data = dict(component)
    else:
        return ValidationResult.fail(f"{role} must be a valid component object")

    missing = [f for f in REQUIRED_COMPONENT_FIELDS if not data.get(f)]
    if missing:
        return ValidationResult.fail(f"{role} is missing required fields: {', '.join(missing)}")

    weight = validate_numeric(
        data["weight"],
        min_value=MIN_COMPONENT_WEIGHT,
        max_value=MAX_COMPONENT_WEIGHT,
        positive=True,
        field=f"{role} weight",
    )
    if not weight.is_valid:
        return ValidationResult.fail(*weight.errors)

    teeth_errors = _validate_teeth(data.get("teeth"), role)
    if teeth_errors:
        return ValidationResult.fail(*teeth_errors)

    try:
        sanitized = Component.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{role} {'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
            for err in e.errors()
        ]
        return ValidationResult.fail(*errors)

    return ValidationResult.ok(sanitized)


def _setup_fields(setup: Any) -> dict[str, Any] | None:
    if isinstance(setup, Setup):
        return {slot: getattr(setup, slot) for slot in SETUP_SLOTS}
    if isinstance(setup, Mapping):
        return dict(setup)
    return None


def validate_setup(setup: Any, bike_type: Any) -> ValidationResult:
    """Validate a (possibly partial) setup against a bike type's tables.

    Wheel and tire must belong to the bike type's allowed sets; components
    are validated individually. All errors are collected. An invalid bike
    type ends validation early because the wheel/tire tables depend on it.
    """
    fields = _setup_fields(setup)
    if fields is None:
        return ValidationResult.fail("Setup must be a valid object")

    bike = validate_bike_type(bike_type)
    if not bike.is_valid:
        log_validation_failure("setup", bike.errors)
        return bike

    config = BIKE_CONFIG[bike.sanitized]
    errors: list[str] = []
    sanitized: dict[str, Any] = {}

    wheel = fields.get("wheel")
    if not is_blank(wheel):
        if wheel not in config["wheel_sizes"]:
            errors.append(f"Wheel size must be one of: {', '.join(config['wheel_sizes'])}")
        else:
            sanitized["wheel"] = wheel

    tire = fields.get("tire")
    if not is_blank(tire):
        tire_check = validate_numeric(tire, positive=True, field="tire width")
        if not tire_check.is_valid:
            errors.extend(tire_check.errors)
        elif tire_check.sanitized not in config["tire_widths"]:
            allowed = ", ".join(str(w) for w in config["tire_widths"])
            errors.append(f"Tire width must be one of: {allowed}")
        else:
            sanitized["tire"] = tire_check.sanitized

    for role in ("crankset", "cassette"):
        component_check = validate_component(fields.get(role), role)
        if not component_check.is_valid:
            errors.extend(component_check.errors)
        else:
            sanitized[role] = component_check.sanitized

    if errors:
        log_validation_failure("setup", errors)
        return ValidationResult(is_valid=False, errors=errors, sanitized=None)

    return ValidationResult.ok(Setup(**sanitized))


def validate_setup_complete(setup: Any) -> SetupCompleteness:
    """Report which of the four setup slots are still empty."""
    fields = _setup_fields(setup) or {}
    missing = []
    for slot in SETUP_SLOTS:
        value = fields.get(slot)
        if slot in ("crankset", "cassette"):
            teeth = value.teeth if isinstance(value, Component) else (
                value.get("teeth") if isinstance(value, Mapping) else None
            )
            if not teeth:
                missing.append(slot)
        elif is_blank(value):
            missing.append(slot)

    completion = (len(SETUP_SLOTS) - len(missing)) / len(SETUP_SLOTS) * 100
    return SetupCompleteness(is_complete=not missing, missing=missing, completion=completion)
