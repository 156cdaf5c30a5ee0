"""Latest weather reading per location, kept in memory."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from src.core.entities import WeatherData
from src.utils.logger import logger

SAMPLE_LOCATION = "Gangnam-gu, Seoul"


class InMemoryWeatherRepository:
    """Keeps one reading per location; an update replaces the previous one."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._readings: dict[str, WeatherData] = {}

    def get(self, location: str) -> Optional[WeatherData]:
        return self._readings.get(location)

    def update(
        self,
        location: str,
        temperature: float,
        heat_index: Optional[float] = None,
        weather_alert: Optional[str] = None,
    ) -> WeatherData:
        reading = WeatherData(
            id=str(uuid4()),
            location=location,
            temperature=temperature,
            heat_index=heat_index,
            weather_alert=weather_alert,
            updated_at=self._clock(),
        )
        self._readings[location] = reading
        logger.info(
            "Weather for {}: {} C (heat index {}, alert {})",
            location,
            reading.temperature,
            reading.heat_index,
            reading.weather_alert,
        )
        return reading

    @classmethod
    def with_sample_data(
        cls, clock: Callable[[], datetime] | None = None
    ) -> "InMemoryWeatherRepository":
        repository = cls(clock)
        repository.update(SAMPLE_LOCATION, 35.0, heat_index=38.0, weather_alert="heat_advisory")
        return repository


__all__ = ["InMemoryWeatherRepository", "SAMPLE_LOCATION"]
