"""Value types shared by several services."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LocationCoordinates:
    """A location in terms of its latitude and longitude."""

    latitude: float
    longitude: float

    @property
    def url_pair(self) -> str:
        """Render as ``"latitude,longitude"`` for use in query strings."""

        return f"{self.latitude},{self.longitude}"

    def truncated(self, precision: int) -> LocationCoordinates:
        """Reduce accuracy to at most `precision` digits after the decimal point."""

        scale = 10**precision
        return LocationCoordinates(
            latitude=math.floor(self.latitude * scale) / scale,
            longitude=math.floor(self.longitude * scale) / scale,
        )


def parse_coordinate(text: str) -> float:
    """Parse one latitude or longitude value, rejecting non-finite numbers."""

    try:
        value = float(text)
    except ValueError as exc:
        raise ValueError(f"<{text}> is not a valid coordinate") from exc
    if not math.isfinite(value):
        raise ValueError(f"<{text}> is not a valid coordinate")
    return value
