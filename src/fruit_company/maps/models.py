"""Payload shapes returned by the maps service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import UnexpectedResponseError
from ..models.common import LocationCoordinates

MAPKIT_API_URL = "https://maps-api.apple.com/v1"


@dataclass(frozen=True, slots=True)
class MapRegion:
    east_longitude: float
    north_latitude: float
    south_latitude: float
    west_longitude: float


@dataclass(frozen=True, slots=True)
class Place:
    """A place returned by geocoding or reverse geocoding."""

    name: str
    country: str | None
    country_code: str | None
    coordinate: LocationCoordinates | None
    formatted_address_lines: tuple[str, ...] = ()
    display_map_region: MapRegion | None = None
    structured_address: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PlaceResults:
    results: tuple[Place, ...]


def parse_place_results(payload: Any) -> PlaceResults:
    if not isinstance(payload, Mapping) or not isinstance(payload.get("results"), list):
        raise UnexpectedResponseError("Place results payload is missing a 'results' list")
    return PlaceResults(results=tuple(_parse_place(item) for item in payload["results"]))


def _parse_place(raw: Any) -> Place:
    if not isinstance(raw, Mapping):
        raise UnexpectedResponseError(f"Unexpected place entry: {raw!r}")
    coordinate = raw.get("coordinate")
    region = raw.get("displayMapRegion")
    return Place(
        name=str(raw.get("name") or ""),
        country=raw.get("country"),
        country_code=raw.get("countryCode"),
        coordinate=(
            LocationCoordinates(coordinate["latitude"], coordinate["longitude"])
            if isinstance(coordinate, Mapping)
            else None
        ),
        formatted_address_lines=tuple(raw.get("formattedAddressLines") or ()),
        display_map_region=(
            MapRegion(
                east_longitude=region["eastLongitude"],
                north_latitude=region["northLatitude"],
                south_latitude=region["southLatitude"],
                west_longitude=region["westLongitude"],
            )
            if isinstance(region, Mapping)
            else None
        ),
        structured_address=dict(raw.get("structuredAddress") or {}),
    )
