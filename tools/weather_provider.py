"""Weather provider abstractions and the Open-Meteo implementation."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List

import requests
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from logic.errors import UpstreamError
from models.weather import WeatherSnapshot
from tools.observability import instrument_call


LOGGER = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

WMO_DESCRIPTIONS: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


class _GeocodeResult(BaseModel):
    name: str
    latitude: float
    longitude: float
    country: str = "Unknown"


class _GeocodeResponse(BaseModel):
    results: List[_GeocodeResult] = []


class _CurrentConditions(BaseModel):
    temperature_2m: float
    relative_humidity_2m: float = 0.0
    precipitation: float = 0.0
    weather_code: int = -1
    wind_speed_10m: float = 0.0


class _ForecastResponse(BaseModel):
    current: _CurrentConditions


def describe_weather_code(code: int) -> str:
    return WMO_DESCRIPTIONS.get(code, "Unknown")


def normalize_location_name(location: str) -> str:
    """Drop periods, collapse whitespace and strip a trailing ``DC``."""

    normalized = re.sub(r"\s+", " ", location.replace(".", "")).strip()
    return re.sub(r"\s+DC$", "", normalized, flags=re.IGNORECASE)


def summarize_weather(temperature: float, description: str, wind_speed: float, precipitation: float) -> str:
    """Compose a short natural-language summary with a comfort hint."""

    temp_f = round(temperature * 9 / 5 + 32)
    summary = f"{description}, {round(temperature)}°C ({temp_f}°F)"
    if wind_speed > 20:
        summary += f", windy ({round(wind_speed)} km/h)"
    if precipitation > 0:
        summary += f", {precipitation}mm precipitation"

    if temperature < 5:
        summary += " - Very cold, dress warmly"
    elif temperature < 15:
        summary += " - Cool, consider layers"
    elif temperature > 30:
        summary += " - Very hot, stay cool"
    elif temperature > 25:
        summary += " - Warm, light clothing recommended"
    return summary


class WeatherProvider(ABC):
    """Abstract current-weather lookup."""

    @abstractmethod
    def get_current_weather(self, location: str) -> WeatherSnapshot:
        """Return current conditions or raise :class:`UpstreamError`."""


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo geocoding and current conditions; no API key required."""

    def __init__(self, timeout_seconds: float = 10.0) -> None:
        self.timeout_seconds = timeout_seconds

    def _get_json(self, url: str, params: Dict[str, object], label: str) -> object:
        try:
            response = requests.get(url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            LOGGER.error("%s API unreachable", label, exc_info=exc)
            raise UpstreamError(f"{label} API error: {exc}") from exc
        except ValueError as exc:
            raise UpstreamError(f"{label} API returned a non-JSON payload") from exc

    def geocode(self, location: str) -> _GeocodeResult:
        normalized = normalize_location_name(location)
        if not normalized:
            raise UpstreamError("Location is required for weather lookups")
        payload = self._get_json(
            GEOCODING_URL,
            {"name": normalized, "count": 1, "language": "en", "format": "json"},
            "Geocoding",
        )
        try:
            parsed = _GeocodeResponse.model_validate(payload)
        except SchemaValidationError as exc:
            raise UpstreamError("Geocoding payload schema validation failed") from exc
        if not parsed.results:
            raise UpstreamError(f"Location not found: {location}")
        return parsed.results[0]

    @instrument_call("open_meteo.current_weather")
    def get_current_weather(self, location: str) -> WeatherSnapshot:
        place = self.geocode(location)
        LOGGER.info("Fetching current weather", extra={"place": place.name, "country": place.country})
        payload = self._get_json(
            FORECAST_URL,
            {
                "latitude": place.latitude,
                "longitude": place.longitude,
                "current": "temperature_2m,relative_humidity_2m,precipitation,weather_code,wind_speed_10m",
                "temperature_unit": "celsius",
                "wind_speed_unit": "kmh",
            },
            "Weather",
        )
        try:
            current = _ForecastResponse.model_validate(payload).current
        except SchemaValidationError as exc:
            raise UpstreamError("Weather payload schema validation failed") from exc

        celsius = current.temperature_2m
        description = describe_weather_code(current.weather_code)
        return WeatherSnapshot(
            location=f"{place.name}, {place.country}",
            latitude=place.latitude,
            longitude=place.longitude,
            temperature=round(celsius, 1),
            temperature_fahrenheit=round(celsius * 9 / 5 + 32, 1),
            weather_code=current.weather_code,
            weather_description=description,
            humidity=current.relative_humidity_2m,
            wind_speed=round(current.wind_speed_10m, 1),
            precipitation=current.precipitation,
            summary=summarize_weather(celsius, description, current.wind_speed_10m, current.precipitation),
        )


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests.

    Pass ``error`` to simulate a failing lookup.
    """

    def __init__(self, snapshot: WeatherSnapshot | None = None, error: Exception | None = None) -> None:
        self.snapshot = snapshot or WeatherSnapshot(
            location="Tokyo, Japan",
            latitude=35.6895,
            longitude=139.6917,
            temperature=28.0,
            temperature_fahrenheit=82.4,
            weather_code=1,
            weather_description="Mainly clear",
            humidity=70.0,
            wind_speed=8.0,
            precipitation=0.0,
            summary=summarize_weather(28.0, "Mainly clear", 8.0, 0.0),
        )
        self.error = error
        self.requested: List[str] = []

    def get_current_weather(self, location: str) -> WeatherSnapshot:
        LOGGER.info("Returning mock weather", extra={"place": location})
        self.requested.append(location)
        if self.error is not None:
            raise self.error
        return self.snapshot


__all__ = [
    "WeatherProvider",
    "OpenMeteoProvider",
    "MockWeatherProvider",
    "describe_weather_code",
    "normalize_location_name",
    "summarize_weather",
]
