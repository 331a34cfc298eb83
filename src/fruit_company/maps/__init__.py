"""Maps service bindings."""
from .models import MAPKIT_API_URL, MapRegion, Place, PlaceResults
from .requests import GeocodeAddress, ReverseGeocodeAddress
from .token import MapsToken

__all__ = [
    "GeocodeAddress",
    "MAPKIT_API_URL",
    "MapRegion",
    "MapsToken",
    "Place",
    "PlaceResults",
    "ReverseGeocodeAddress",
]
