"""Use case for recording a new head count at a shelter."""
from __future__ import annotations

from typing import Optional, Protocol

from src.core.entities import Shelter
from src.core.errors import ShelterNotFoundError


class OccupancyStore(Protocol):
    def update_occupancy(self, shelter_id: str, occupancy: int) -> Optional[Shelter]:
        ...


class UpdateOccupancyUseCase:
    def __init__(self, store: OccupancyStore) -> None:
        self._store = store

    def execute(self, shelter_id: str, occupancy: int) -> Shelter:
        shelter = self._store.update_occupancy(shelter_id, occupancy)
        if shelter is None:
            raise ShelterNotFoundError(f"Shelter '{shelter_id}' not found")
        return shelter


__all__ = ["UpdateOccupancyUseCase"]
