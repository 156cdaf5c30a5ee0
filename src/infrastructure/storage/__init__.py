"""In-memory keyed tables backing the shelter and posture services."""

from .favorites import InMemoryFavoriteRepository
from .sessions import InMemoryPostureSessionRepository, InMemoryUserSettingsRepository
from .shelters import InMemoryShelterRepository, ShelterRepository
from .weather import InMemoryWeatherRepository

__all__ = [
    "InMemoryFavoriteRepository",
    "InMemoryPostureSessionRepository",
    "InMemoryShelterRepository",
    "InMemoryUserSettingsRepository",
    "InMemoryWeatherRepository",
    "ShelterRepository",
]
