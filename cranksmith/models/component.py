"""Catalog components and the four-slot drivetrain setup."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from ..core.enums import BikeType
from ..utils.converters import parse_speed_count

SETUP_SLOTS = ("wheel", "tire", "crankset", "cassette")


class Component(BaseModel):
    """A crankset or cassette record from the catalog.

    ``teeth`` holds chainrings for a crankset and cogs for a cassette. Order is
    conventional (cranksets largest first) but never relied on.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    model: str
    variant: str = ""
    teeth: tuple[int, ...] = Field(min_length=1)
    speeds: Optional[int] = None
    weight: float = Field(gt=0)
    bike_types: tuple[BikeType, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def accept_catalog_keys(cls, data: Any) -> Any:
        """Accept the catalog's ``bikeType`` (string or list) and speed text."""
        if isinstance(data, dict):
            data = dict(data)
            legacy = data.pop("bikeType", None)
            if legacy is not None and data.get("bike_types") is None:
                data["bike_types"] = [legacy] if isinstance(legacy, str) else list(legacy)
            if isinstance(data.get("bike_types"), str):
                data["bike_types"] = [data["bike_types"]]
            speeds = data.get("speeds")
            if "speeds" in data and (isinstance(speeds, bool) or not isinstance(speeds, int)):
                data["speeds"] = parse_speed_count(data["speeds"])
        return data

    @field_validator("teeth")
    @classmethod
    def teeth_must_be_positive(cls, teeth: tuple[int, ...]) -> tuple[int, ...]:
        if any(t <= 0 for t in teeth):
            raise ValueError("tooth counts must be positive integers")
        return teeth

    @property
    def max_teeth(self) -> int:
        return max(self.teeth)

    @property
    def min_teeth(self) -> int:
        return min(self.teeth)

    def fits_bike_type(self, bike_type: BikeType | str) -> bool:
        return BikeType(bike_type) in self.bike_types


class Setup(BaseModel):
    """A drivetrain configuration being edited. Every slot is optional.

    Only a complete setup (all four slots filled) can be computed.
    """

    model_config = ConfigDict(frozen=True)

    wheel: Optional[str] = None
    tire: Optional[float] = None
    crankset: Optional[Component] = None
    cassette: Optional[Component] = None

    def missing_fields(self) -> list[str]:
        return [slot for slot in SETUP_SLOTS if getattr(self, slot) is None]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    @property
    def completion(self) -> float:
        """Percentage of the four slots that are filled."""
        filled = len(SETUP_SLOTS) - len(self.missing_fields())
        return filled / len(SETUP_SLOTS) * 100
