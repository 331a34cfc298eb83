"""Typed shapes of weather payloads after timestamp conversion."""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict


class Metadata(TypedDict, total=False):
    attributionURL: str
    expireTime: datetime
    language: str
    latitude: float
    longitude: float
    providerLogo: str
    providerName: str
    readTime: datetime
    reportedTime: datetime
    temporarilyUnavailable: bool
    units: str
    version: int


class CurrentWeather(TypedDict, total=False):
    metadata: Metadata
    asOf: datetime
    cloudCover: float
    conditionCode: str
    daylight: bool
    humidity: float
    precipitationIntensity: float
    pressure: float
    pressureTrend: str
    temperature: float
    temperatureApparent: float
    temperatureDewPoint: float
    uvIndex: int
    visibility: float
    windDirection: int
    windGust: float
    windSpeed: float


class DayPartForecast(TypedDict, total=False):
    cloudCover: float
    conditionCode: str
    forecastEnd: datetime
    forecastStart: datetime
    humidity: float
    precipitationAmount: float
    precipitationChance: float
    precipitationType: str
    snowfallAmount: float
    windDirection: int
    windSpeed: float


class DayWeatherConditions(TypedDict, total=False):
    conditionCode: str
    daytimeForecast: DayPartForecast
    forecastEnd: datetime
    forecastStart: datetime
    maxUvIndex: int
    moonPhase: str
    moonrise: datetime
    moonset: datetime
    overnightForecast: DayPartForecast
    precipitationAmount: float
    precipitationChance: float
    precipitationType: str
    snowfallAmount: float
    solarMidnight: datetime
    solarNoon: datetime
    sunrise: datetime
    sunset: datetime
    temperatureMax: float
    temperatureMin: float


class DailyForecast(TypedDict, total=False):
    metadata: Metadata
    days: list[DayWeatherConditions]
    learnMoreURL: str


class HourWeatherConditions(TypedDict, total=False):
    cloudCover: float
    conditionCode: str
    daylight: bool
    forecastStart: datetime
    humidity: float
    precipitationAmount: float
    precipitationChance: float
    precipitationType: str
    pressure: float
    pressureTrend: str
    temperature: float
    temperatureApparent: float
    uvIndex: int
    visibility: float
    windDirection: int
    windGust: float
    windSpeed: float


class HourlyForecast(TypedDict, total=False):
    metadata: Metadata
    hours: list[HourWeatherConditions]


class ForecastMinute(TypedDict, total=False):
    precipitationChance: float
    precipitationIntensity: float
    startTime: datetime


class ForecastPeriodSummary(TypedDict, total=False):
    condition: str
    endTime: datetime
    precipitationChance: float
    precipitationIntensity: float
    startTime: datetime


class NextHourForecast(TypedDict, total=False):
    metadata: Metadata
    forecastEnd: datetime
    forecastStart: datetime
    minutes: list[ForecastMinute]
    summary: list[ForecastPeriodSummary]


class WeatherAlertSummary(TypedDict, total=False):
    areaId: str
    areaName: str
    certainty: str
    countryCode: str
    description: str
    detailsUrl: str
    effectiveTime: datetime
    eventEndTime: datetime
    eventOnsetTime: datetime
    expireTime: datetime
    id: str
    issuedTime: datetime
    responses: list[str]
    severity: str
    source: str
    urgency: str


class WeatherAlertCollection(TypedDict, total=False):
    metadata: Metadata
    alerts: list[WeatherAlertSummary]
    detailsUrl: str


class Weather(TypedDict, total=False):
    """One key per requested data set; absent sets are omitted."""

    currentWeather: CurrentWeather
    forecastDaily: DailyForecast
    forecastHourly: HourlyForecast
    forecastNextHour: NextHourForecast
    weatherAlerts: WeatherAlertCollection


Attribution = TypedDict(
    "Attribution",
    {
        "logoDark@1x": str,
        "logoDark@2x": str,
        "logoDark@3x": str,
        "logoLight@1x": str,
        "logoLight@2x": str,
        "logoLight@3x": str,
        "logoSquare@1x": str,
        "logoSquare@2x": str,
        "logoSquare@3x": str,
        "serviceName": str,
        "legalPageURL": str,
    },
    total=False,
)
