"""Calculator, checker and comparison outputs.

All results are immutable value objects, created fresh per calculation.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import ChangeKind, CompatibilityStatus, GearClass, SpeedUnit, UpgradeVerdict


class ValidationResult(BaseModel):
    """Outcome of validating one raw value, component or setup.

    ``sanitized`` is withheld (None) whenever ``errors`` is non-empty.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[str] = []
    sanitized: Any = None

    @classmethod
    def ok(cls, sanitized: Any = None) -> "ValidationResult":
        return cls(is_valid=True, errors=[], sanitized=sanitized)

    @classmethod
    def fail(cls, *errors: str) -> "ValidationResult":
        return cls(is_valid=False, errors=list(errors), sanitized=None)


class SetupCompleteness(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_complete: bool
    missing: list[str]
    completion: float  # 0-100


class GearPairResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    chainring: int
    cog: int
    ratio: float
    gear_inches: float
    speed: float
    classification: GearClass


class SetupMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    high_ratio: float
    low_ratio: float
    high_speed: float
    low_speed: float


class ComputedSetup(BaseModel):
    """Every gear of a complete setup plus its summary figures."""

    model_config = ConfigDict(frozen=True)

    gears: tuple[GearPairResult, ...]
    total_weight: float  # grams, incl. chain and derailleur allowances
    metrics: SetupMetrics
    gear_range: int  # high_ratio / low_ratio as a whole percent
    speed_unit: SpeedUnit
    cadence_rpm: float
    wheel_circumference_mm: float


class CompatibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: CompatibilityStatus
    issues: list[str] = []  # hard failures
    warnings: list[str] = []  # soft cautions


class DrivetrainChecks(BaseModel):
    model_config = ConfigDict(frozen=True)

    derailleur_capacity: bool = True
    chain_length: bool = True
    speed_compatibility: bool = True
    chain_line: bool = True


class DrivetrainAnalysis(BaseModel):
    """Detailed per-rule compatibility breakdown for one setup."""

    model_config = ConfigDict(frozen=True)

    status: CompatibilityStatus
    critical_issues: list[str] = []
    minor_warnings: list[str] = []
    action_items: list[str] = []
    checks: DrivetrainChecks = DrivetrainChecks()
    recommended_cage: Optional[str] = None
    total_capacity: Optional[int] = None


class GearOverlap(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: int
    overlaps: list[tuple[int, int, int, int]] = []  # (small ring, cog, big ring, other cog)


class GearRatioAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_ratio: float
    max_ratio: float
    ratio_spread: float
    total_gears: int
    warnings: list[str] = []
    recommendations: list[str] = []
    overlap: Optional[GearOverlap] = None


class ComparisonVerdict(BaseModel):
    """Renderer-neutral summary of what the proposed setup changes."""

    model_config = ConfigDict(frozen=True)

    improvements: list[ChangeKind] = []
    drawbacks: list[ChangeKind] = []
    verdict: UpgradeVerdict


class ComparisonResult(BaseModel):
    """Signed deltas, proposed minus current.

    Negative ``weight_change`` means the proposed setup is lighter (better);
    positive ``speed_change`` and ``range_change`` are better.
    """

    model_config = ConfigDict(frozen=True)

    weight_change: float
    speed_change: float  # top-end (high_speed) difference
    range_change: int
    speed_unit: SpeedUnit
    verdict: ComparisonVerdict


class UpgradeAnalysis(BaseModel):
    """Everything a presentation layer needs for a current-vs-proposed view."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[str] = []
    current: Optional[ComputedSetup] = None
    proposed: Optional[ComputedSetup] = None
    compatibility: Optional[CompatibilityResult] = None
    comparison: Optional[ComparisonResult] = None
    speed_unit: SpeedUnit = Field(default=SpeedUnit.MPH)
