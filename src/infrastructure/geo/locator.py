"""Resolve where the user is, falling back to a fixed coordinate."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from geopy.exc import GeocoderServiceError
from geopy.geocoders import Nominatim

from src.core.entities import Coordinate
from src.core.errors import InvalidInputError
from src.utils.logger import logger

# Gangnam-gu office, Seoul
DEFAULT_FALLBACK = Coordinate(latitude=37.5172, longitude=127.0473)


@dataclass
class UserLocator:
    """Turn explicit coordinates or a free-text address into a :class:`Coordinate`."""

    fallback: Coordinate = DEFAULT_FALLBACK
    user_agent: str = "heat-shelter-finder"
    timeout: int = 5
    language: str = "ko"
    country_codes: Optional[str] = "kr"

    def __post_init__(self) -> None:
        self._geolocator = Nominatim(user_agent=self.user_agent, timeout=self.timeout)

    def locate(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        address: Optional[str] = None,
    ) -> Coordinate:
        if latitude is not None and longitude is not None:
            return Coordinate(latitude=latitude, longitude=longitude)

        if latitude is not None or longitude is not None:
            raise InvalidInputError("Both latitude and longitude must be provided together.")

        if address and address.strip():
            resolved = self._geocode(address.strip())
            if resolved is not None:
                return resolved

        logger.warning(
            "User location unavailable; using fallback ({}, {})",
            self.fallback.latitude,
            self.fallback.longitude,
        )
        return self.fallback

    def _geocode(self, address: str) -> Optional[Coordinate]:
        logger.debug("Geocoding address: {}", address)
        try:
            location = self._geolocator.geocode(
                address,
                language=self.language,
                country_codes=self.country_codes,
            )
        except (GeocoderServiceError, ValueError) as error:
            logger.warning("Geocoding failed for {}: {}", address, error)
            return None

        if location is None:
            logger.info("No coordinates found for {}", address)
            return None

        logger.debug("Resolved {} to ({}, {})", address, location.latitude, location.longitude)
        return Coordinate(latitude=location.latitude, longitude=location.longitude)


__all__ = ["DEFAULT_FALLBACK", "UserLocator"]
