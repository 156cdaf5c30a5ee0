"""Use case for listing shelters with their distance to the user."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Protocol

from src.core.entities import Coordinate, OccupancyLevel, Shelter, ShelterWithDistance
from src.core.errors import InvalidInputError


class ShelterSource(Protocol):
    def list(self) -> list[Shelter]:
        ...


class DistanceProjector(Protocol):
    def with_distance(
        self, shelters: Iterable[Shelter], origin: Coordinate
    ) -> list[ShelterWithDistance]:
        ...


_OCCUPANCY_ORDER = {OccupancyLevel.LOW: 1, OccupancyLevel.MEDIUM: 2, OccupancyLevel.HIGH: 3}

SORT_KEYS: dict[str, Callable[[ShelterWithDistance], Any]] = {
    "distance": lambda shelter: shelter.distance,
    "occupancy": lambda shelter: _OCCUPANCY_ORDER[shelter.occupancy_level],
    "rating": lambda shelter: -shelter.rating,
    "name": lambda shelter: shelter.name.casefold(),
}


def _matches(shelter: Shelter, query: str) -> bool:
    needle = query.casefold()
    return needle in shelter.name.casefold() or needle in shelter.address.casefold()


class FindNearbySheltersUseCase:
    """Project the stored shelters onto the user coordinate, then filter and sort them.

    ``sort_by`` is one of ``distance`` (nearest first), ``occupancy`` (low to
    high), ``rating`` (best first) or ``name``. Ties keep repository order.
    """

    def __init__(self, shelters: ShelterSource, projector: DistanceProjector) -> None:
        self._shelters = shelters
        self._projector = projector

    def execute(
        self,
        origin: Coordinate,
        active_only: bool = False,
        query: Optional[str] = None,
        sort_by: str = "distance",
    ) -> list[ShelterWithDistance]:
        key = SORT_KEYS.get(sort_by)
        if key is None:
            raise InvalidInputError(
                f"sort_by must be one of {', '.join(SORT_KEYS)}; got {sort_by!r}"
            )

        candidates = self._shelters.list()
        if active_only:
            candidates = [shelter for shelter in candidates if shelter.is_active]
        if query and query.strip():
            candidates = [shelter for shelter in candidates if _matches(shelter, query.strip())]

        projected = self._projector.with_distance(candidates, origin)
        return sorted(projected, key=key)


__all__ = ["FindNearbySheltersUseCase", "SORT_KEYS"]
