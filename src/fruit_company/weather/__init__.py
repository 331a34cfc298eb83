"""Weather service bindings."""
from .derivatives import (
    Chance,
    Comfort,
    Intensity,
    Risk,
    humidity_comfort_from,
    precipitation_intensity_from,
    probability_chance_from,
    uv_index_risk_from,
)
from .models import (
    Attribution,
    CurrentWeather,
    DailyForecast,
    HourlyForecast,
    NextHourForecast,
    Weather,
    WeatherAlertCollection,
)
from .requests import (
    ALL_WEATHER_DATA_SETS,
    WEATHERKIT_URL,
    WeatherAttribution,
    WeatherDataSet,
    WeatherQuery,
)
from .token import WeatherToken

__all__ = [
    "ALL_WEATHER_DATA_SETS",
    "Attribution",
    "Chance",
    "Comfort",
    "CurrentWeather",
    "DailyForecast",
    "HourlyForecast",
    "Intensity",
    "NextHourForecast",
    "Risk",
    "WEATHERKIT_URL",
    "Weather",
    "WeatherAlertCollection",
    "WeatherAttribution",
    "WeatherDataSet",
    "WeatherQuery",
    "WeatherToken",
    "humidity_comfort_from",
    "precipitation_intensity_from",
    "probability_chance_from",
    "uv_index_risk_from",
]
