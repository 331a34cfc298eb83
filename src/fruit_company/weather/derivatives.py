"""Categorize raw weather measurements into human-readable bands."""

from __future__ import annotations

import math
from enum import Enum


class Chance(str, Enum):
    """How likely an event such as rain is, given its probability."""

    NONE = "none"
    SLIGHT = "slight"
    POSSIBLE = "possible"
    LIKELY = "likely"
    CERTAIN = "certain"


class Comfort(str, Enum):
    TOO_LOW = "tooLow"
    FAIR = "fair"
    GOOD = "good"
    TOO_HIGH = "tooHigh"


class Intensity(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    VIOLENT = "violent"


class Risk(str, Enum):
    """Danger a measurement such as the UV index poses to the average person."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "veryHigh"
    EXTREME = "extreme"


def probability_chance_from(probability: float) -> Chance:
    """Map a probability in ``[0, 1]`` to a `Chance`.

    Raises:
        ValueError: if `probability` falls outside ``[0, 1]``.
    """

    if probability == 0.0:
        return Chance.NONE
    if 0.0 < probability <= 0.2:
        return Chance.SLIGHT
    if 0.2 < probability <= 0.8:
        return Chance.POSSIBLE
    if 0.8 < probability < 1.0:
        return Chance.LIKELY
    if probability == 1.0:
        return Chance.CERTAIN
    raise ValueError(f"<{probability}> is not a valid probability")


def humidity_comfort_from(humidity: float) -> Comfort:
    """Map a relative humidity fraction in ``[0, 1]`` to a `Comfort`."""

    if 0.0 <= humidity <= 0.2:
        return Comfort.TOO_LOW
    if 0.2 < humidity <= 0.3:
        return Comfort.FAIR
    if 0.3 < humidity <= 0.6:
        return Comfort.GOOD
    if 0.6 < humidity <= 0.7:
        return Comfort.FAIR
    if 0.7 < humidity <= 1.0:
        return Comfort.TOO_HIGH
    raise ValueError(f"<{humidity}> is not a valid humidity")


def precipitation_intensity_from(rate_mm_per_hour: float) -> Intensity:
    """Band a precipitation rate given in millimeters per hour."""

    if math.isnan(rate_mm_per_hour) or rate_mm_per_hour < 0.0:
        raise ValueError(
            f"<{rate_mm_per_hour}> is not a valid rain precipitation intensity value"
        )
    if rate_mm_per_hour <= 2.5:
        return Intensity.LIGHT
    if rate_mm_per_hour <= 7.5:
        return Intensity.MODERATE
    if rate_mm_per_hour <= 50:
        return Intensity.HEAVY
    return Intensity.VIOLENT


def uv_index_risk_from(uv_index: float) -> Risk:
    # Fractional indexes between bands (2.5, 5.5, ...) are rejected.
    if 0 <= uv_index <= 2:
        return Risk.LOW
    if 3 <= uv_index <= 5:
        return Risk.MODERATE
    if 6 <= uv_index <= 7:
        return Risk.HIGH
    if 8 <= uv_index <= 10:
        return Risk.VERY_HIGH
    if uv_index >= 11:
        return Risk.EXTREME
    raise ValueError(f"<{uv_index}> is not a valid UV Index value")
