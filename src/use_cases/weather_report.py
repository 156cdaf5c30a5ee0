"""Use case for reading and recording heat conditions per location."""
from __future__ import annotations

from typing import Optional, Protocol

from src.core.entities import WeatherData
from src.core.errors import WeatherDataNotFoundError


class WeatherStore(Protocol):
    def get(self, location: str) -> Optional[WeatherData]:
        ...

    def update(
        self,
        location: str,
        temperature: float,
        heat_index: Optional[float] = None,
        weather_alert: Optional[str] = None,
    ) -> WeatherData:
        ...


class WeatherReportUseCase:
    def __init__(self, store: WeatherStore) -> None:
        self._store = store

    def current(self, location: str) -> WeatherData:
        reading = self._store.get(location)
        if reading is None:
            raise WeatherDataNotFoundError(f"No weather data for '{location}'")
        return reading

    def record(
        self,
        location: str,
        temperature: float,
        heat_index: Optional[float] = None,
        weather_alert: Optional[str] = None,
    ) -> WeatherData:
        return self._store.update(
            location, temperature, heat_index=heat_index, weather_alert=weather_alert
        )


__all__ = ["WeatherReportUseCase"]
