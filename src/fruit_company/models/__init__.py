"""Shared data models."""
from .common import LocationCoordinates, parse_coordinate

__all__ = ["LocationCoordinates", "parse_coordinate"]
