"""Error types shared by the shelter and posture domains."""
from __future__ import annotations

import math


class InvalidInputError(ValueError):
    """Raised when a caller supplies data the domain cannot reason about."""


class ShelterNotFoundError(LookupError):
    """Raised when a shelter id is not present in the repository."""


class SessionNotFoundError(LookupError):
    """Raised when a posture session id is not present in the repository."""


class FavoriteNotFoundError(LookupError):
    """Raised when a user has not bookmarked the given shelter."""


class WeatherDataNotFoundError(LookupError):
    """Raised when no weather reading is stored for a location."""


def ensure_finite(name: str, value: float) -> float:
    """Return ``value`` as a float or raise when it is NaN or infinite."""

    try:
        number = float(value)
    except (TypeError, ValueError) as error:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from error

    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return number


__all__ = [
    "FavoriteNotFoundError",
    "InvalidInputError",
    "SessionNotFoundError",
    "ShelterNotFoundError",
    "WeatherDataNotFoundError",
    "ensure_finite",
]
