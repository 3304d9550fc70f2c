"""Current weather snapshot merged into weather-aware recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class WeatherSnapshot:
    location: str
    latitude: float
    longitude: float
    temperature: float
    temperature_fahrenheit: float
    weather_code: int
    weather_description: str
    humidity: float
    wind_speed: float
    precipitation: float
    summary: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "coordinates": {"latitude": self.latitude, "longitude": self.longitude},
            "current": {
                "temperature": self.temperature,
                "temperatureFahrenheit": self.temperature_fahrenheit,
                "weatherCode": self.weather_code,
                "weatherDescription": self.weather_description,
                "humidity": self.humidity,
                "windSpeed": self.wind_speed,
                "precipitation": self.precipitation,
            },
            "summary": self.summary,
        }


__all__ = ["WeatherSnapshot"]
