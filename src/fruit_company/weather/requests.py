"""Weather and attribution requests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, cast

from ..exceptions import RESTError, UnexpectedResponseError
from ..http import HttpResponse, OutboundRequest
from ..models.common import LocationCoordinates
from ..request import Request
from .models import Attribution, Weather
from .token import WeatherToken

WEATHERKIT_URL = "https://weatherkit.apple.com"

# Fields the service documents as ISO-8601 timestamps.
DATE_FIELDS = frozenset(
    {
        "asOf",
        "effectiveTime",
        "endTime",
        "eventEndTime",
        "eventOnsetTime",
        "expireTime",
        "forecastEnd",
        "forecastStart",
        "issuedTime",
        "moonrise",
        "moonset",
        "readTime",
        "reportedTime",
        "solarMidnight",
        "solarNoon",
        "startTime",
        "sunrise",
        "sunriseAstronomical",
        "sunriseCivil",
        "sunriseNautical",
        "sunset",
        "sunsetAstronomical",
        "sunsetCivil",
        "sunsetNautical",
    }
)


class WeatherDataSet(str, Enum):
    CURRENT_WEATHER = "currentWeather"
    FORECAST_DAILY = "forecastDaily"
    FORECAST_HOURLY = "forecastHourly"
    FORECAST_NEXT_HOUR = "forecastNextHour"
    WEATHER_ALERTS = "weatherAlerts"


ALL_WEATHER_DATA_SETS: tuple[WeatherDataSet, ...] = tuple(WeatherDataSet)


@dataclass(frozen=True)
class WeatherQuery(Request[WeatherToken, Weather]):
    """Fetch weather data sets for a location."""

    language: str
    location: LocationCoordinates
    timezone: str
    country_code: str | None = None
    current_as_of: datetime | None = None
    daily_end: datetime | None = None
    daily_start: datetime | None = None
    data_sets: Sequence[WeatherDataSet] | None = None
    hourly_end: datetime | None = None
    hourly_start: datetime | None = None

    def prepare(self, authority: WeatherToken) -> OutboundRequest:
        url = (
            f"{WEATHERKIT_URL}/api/v1/weather/{self.language}/"
            f"{self.location.latitude}/{self.location.longitude}"
        )
        params: list[tuple[str, str]] = [("timezone", self.timezone)]
        if self.country_code is not None:
            # The service documents "countryCode" but has been observed to
            # honour "country"; send both.
            params.append(("countryCode", self.country_code))
            params.append(("country", self.country_code))
        optional_dates = (
            ("currentAsOf", self.current_as_of),
            ("dailyEnd", self.daily_end),
            ("dailyStart", self.daily_start),
            ("hourlyEnd", self.hourly_end),
            ("hourlyStart", self.hourly_start),
        )
        for key, value in optional_dates:
            if value is not None:
                params.append((key, _format_datetime(value)))
        if self.data_sets is not None:
            params.append(("dataSets", ",".join(WeatherDataSet(item).value for item in self.data_sets)))
        return OutboundRequest(url=url, params=params)

    def parse(self, authority: WeatherToken, response: HttpResponse) -> Weather:
        if not response.ok:
            raise RESTError(
                f"<{response.url}>",
                status_code=response.status_code,
                status_text=response.status_text,
            )
        payload = response.json()
        if not isinstance(payload, Mapping):
            raise UnexpectedResponseError("Weather payload is not a JSON object")
        return cast(Weather, convert_dates(payload))


@dataclass(frozen=True)
class WeatherAttribution(Request[WeatherToken, Attribution]):
    """Fetch the attribution and logos that must accompany weather data."""

    language: str

    def prepare(self, authority: WeatherToken) -> OutboundRequest:
        return OutboundRequest(url=f"{WEATHERKIT_URL}/attribution/{self.language}")

    def parse(self, authority: WeatherToken, response: HttpResponse) -> Attribution:
        if not response.ok:
            raise RESTError(
                f"<{response.url}>",
                status_code=response.status_code,
                status_text=response.status_text,
            )
        payload = response.json()
        if not isinstance(payload, Mapping):
            raise UnexpectedResponseError("Attribution payload is not a JSON object")
        attribution: dict[str, Any] = {}
        for key, value in payload.items():
            if key.startswith("logo") and isinstance(value, str):
                attribution[key] = f"{WEATHERKIT_URL}{value}"
            else:
                attribution[key] = value
        return cast(Attribution, attribution)


def convert_dates(value: Any) -> Any:
    """Return a copy of `value` with known timestamp fields parsed into datetimes."""

    if isinstance(value, Mapping):
        converted: dict[str, Any] = {}
        for key, item in value.items():
            if key in DATE_FIELDS and isinstance(item, str):
                converted[key] = _parse_datetime(item)
            else:
                converted[key] = convert_dates(item)
        return converted
    if isinstance(value, list):
        return [convert_dates(item) for item in value]
    return value


def _parse_datetime(text: str) -> datetime:
    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise UnexpectedResponseError(f"<{text}> is not an ISO-8601 timestamp") from exc


def _format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
