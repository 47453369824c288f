"""Enums for drivetrain and bike-fit constants."""

from enum import Enum


class BikeType(str, Enum):
    """Bike families the catalog and wheel/tire tables are keyed by."""

    ROAD = "road"
    GRAVEL = "gravel"
    MTB = "mtb"

    @classmethod
    def from_string(cls, value: str | None) -> "BikeType | None":
        """Convert string to enum, returning None if invalid."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class SpeedUnit(str, Enum):
    """Unit speeds are reported in."""

    KMH = "kmh"
    MPH = "mph"

    @classmethod
    def from_string(cls, value: str | None) -> "SpeedUnit | None":
        """Convert string to enum, handling common spellings."""
        if not value:
            return None
        mappings = {
            "kmh": cls.KMH,
            "km/h": cls.KMH,
            "kph": cls.KMH,
            "mph": cls.MPH,
        }
        return mappings.get(value.strip().lower())


class GearClass(str, Enum):
    """Usage band of a single chainring/cog combination."""

    CLIMBING = "climbing"
    ALL_AROUND = "all_around"
    SPRINT = "sprint"


class CompatibilityStatus(str, Enum):
    """Overall compatibility, ordered by severity."""

    COMPATIBLE = "compatible"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _STATUS_SEVERITY[self]

    @classmethod
    def from_findings(cls, issues: list[str], warnings: list[str]) -> "CompatibilityStatus":
        """Error if any issue, else warning if any warning, else compatible."""
        if issues:
            return cls.ERROR
        if warnings:
            return cls.WARNING
        return cls.COMPATIBLE


_STATUS_SEVERITY = {
    CompatibilityStatus.COMPATIBLE: 0,
    CompatibilityStatus.WARNING: 1,
    CompatibilityStatus.ERROR: 2,
}


class ChangeKind(str, Enum):
    """A notable difference between a current and a proposed setup."""

    WEIGHT_SAVED = "weight_saved"
    WEIGHT_ADDED = "weight_added"
    SPEED_GAINED = "speed_gained"
    SPEED_LOST = "speed_lost"
    RANGE_ADDED = "range_added"
    RANGE_REDUCED = "range_reduced"


class UpgradeVerdict(str, Enum):
    """Overall assessment of a proposed setup."""

    SIMILAR = "similar"
    WORTH_UPGRADE = "worth_upgrade"
    MINOR_IMPROVEMENT = "minor_improvement"
    NOT_RECOMMENDED = "not_recommended"


class Flexibility(str, Enum):
    LOW = "low"
    AVERAGE = "average"
    HIGH = "high"


class RidingStyle(str, Enum):
    COMFORT = "comfort"
    ENDURANCE = "endurance"
    SPORT = "sport"
    AGGRESSIVE = "aggressive"
    RACING = "racing"


class Experience(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"


class MeasurementUnits(str, Enum):
    """Display units for body measurements. Stored values are always mm."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class MeasurementField(str, Enum):
    """Body measurements the bike-fit module accepts as text input."""

    INSEAM = "inseam"
    TORSO = "torso"
    ARM_LENGTH = "arm_length"
