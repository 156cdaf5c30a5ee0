"""Use case for recommending the best shelters around the user."""
from __future__ import annotations

from typing import Iterable, Protocol

from src.core.entities import Coordinate, Recommendation, Shelter
from src.utils.logger import logger


class ShelterSource(Protocol):
    def list(self) -> list[Shelter]:
        ...


class Ranker(Protocol):
    def recommend(
        self, shelters: Iterable[Shelter], origin: Coordinate, top_n: int = 3
    ) -> list[Recommendation]:
        ...


class RecommendSheltersUseCase:
    """Rank the stored shelters for a user coordinate."""

    def __init__(self, shelters: ShelterSource, ranker: Ranker, active_only: bool = True) -> None:
        self._shelters = shelters
        self._ranker = ranker
        self._active_only = active_only

    def execute(self, origin: Coordinate, top_n: int = 3) -> list[Recommendation]:
        candidates = self._shelters.list()
        if self._active_only:
            candidates = [shelter for shelter in candidates if shelter.is_active]
        logger.info(
            "Recommending up to {} of {} shelters near ({}, {})",
            top_n,
            len(candidates),
            origin.latitude,
            origin.longitude,
        )
        return self._ranker.recommend(candidates, origin, top_n=top_n)


__all__ = ["RecommendSheltersUseCase"]
