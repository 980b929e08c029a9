# src/search_criteria/base/geo.py
import math
from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidArgumentError


class DistanceUnit(Enum):
    """Units accepted by geo-distance constraints."""

    KILOMETERS = "km"
    MILES = "mi"
    METERS = "m"


@dataclass(frozen=True)
class GeoLocation:
    """A point given in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        for value in (self.latitude, self.longitude):
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidArgumentError(
                    f"Coordinates must be numbers, got {type(value).__name__}"
                )
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidArgumentError(
                f"Latitude must be within [-90, 90], got {self.latitude!r}"
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidArgumentError(
                f"Longitude must be within [-180, 180], got {self.longitude!r}"
            )


@dataclass(frozen=True)
class Distance:
    value: float
    unit: DistanceUnit = DistanceUnit.KILOMETERS

    def __post_init__(self):
        if not isinstance(self.value, (int, float)) or isinstance(self.value, bool):
            raise InvalidArgumentError(
                f"Distance value must be a number, got {type(self.value).__name__}"
            )
        if not math.isfinite(self.value):
            raise InvalidArgumentError(
                f"Distance value must be finite, got {self.value!r}"
            )
        if not isinstance(self.unit, DistanceUnit):
            raise InvalidArgumentError(
                f"Distance unit must be a DistanceUnit, got {self.unit!r}"
            )

    def render(self) -> str:
        """Renders the distance as the search engine expects it, e.g. ``5.0km``."""
        return f"{float(self.value)}{self.unit.value}"
