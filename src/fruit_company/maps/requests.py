"""Geocoding requests for the maps service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..http import HttpResponse, OutboundRequest, raise_for_status
from ..models.common import LocationCoordinates
from ..request import Request
from .models import MAPKIT_API_URL, PlaceResults, parse_place_results
from .token import MapsToken


class _GeocodingRequest(Request[MapsToken, PlaceResults]):
    def parse(self, authority: MapsToken, response: HttpResponse) -> PlaceResults:
        raise_for_status(response)
        return parse_place_results(response.json())


@dataclass(frozen=True)
class GeocodeAddress(_GeocodingRequest):
    """Find places matching an address or place name."""

    query: str
    limit_to_countries: Sequence[str] | None = None
    language: str | None = None
    search_location: LocationCoordinates | None = None
    search_region: LocationCoordinates | None = None
    user_location: LocationCoordinates | None = None

    def prepare(self, authority: MapsToken) -> OutboundRequest:
        params = [("q", self.query)]
        if self.limit_to_countries is not None:
            params.append(("limitToCountries", ",".join(self.limit_to_countries)))
        if self.language is not None:
            params.append(("lang", self.language))
        if self.search_location is not None:
            params.append(("searchLocation", self.search_location.url_pair))
        if self.search_region is not None:
            params.append(("searchRegion", self.search_region.url_pair))
        if self.user_location is not None:
            params.append(("userLocation", self.user_location.url_pair))
        return OutboundRequest(url=f"{MAPKIT_API_URL}/geocode", params=params)


@dataclass(frozen=True)
class ReverseGeocodeAddress(_GeocodingRequest):
    """Describe the place at a location."""

    location: LocationCoordinates
    language: str | None = None

    def prepare(self, authority: MapsToken) -> OutboundRequest:
        params = [("loc", self.location.url_pair)]
        if self.language is not None:
            params.append(("lang", self.language))
        return OutboundRequest(url=f"{MAPKIT_API_URL}/reverseGeocode", params=params)
