"""Body measurements and bike-fit recommendations (all lengths in mm)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..core.enums import Experience, Flexibility, MeasurementUnits, RidingStyle


class BodyMeasurements(BaseModel):
    """Rider measurements as stored: millimeters, already range-checked.

    ``units`` only controls display and input parsing.
    """

    model_config = ConfigDict(frozen=True)

    inseam: Optional[float] = None
    torso: Optional[float] = None
    arm_length: Optional[float] = None
    flexibility: Flexibility = Flexibility.AVERAGE
    riding_style: RidingStyle = RidingStyle.ENDURANCE
    experience: Experience = Experience.INTERMEDIATE
    units: MeasurementUnits = MeasurementUnits.METRIC


class SaddleHeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    lemond: float
    holmes: float
    hamley: float
    competitive: float


class HandlebarDrop(BaseModel):
    model_config = ConfigDict(frozen=True)

    comfort: float
    sport: float
    aggressive: float


class BikeFitResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    saddle_height: SaddleHeights
    reach: float
    stack: float
    handlebar_drop: HandlebarDrop
