"""Distance projection and top-N ranking of shelters."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from src.core.entities import Coordinate, Recommendation, Shelter, ShelterWithDistance
from src.core.errors import InvalidInputError
from src.infrastructure.geo.distance import haversine_distance
from src.infrastructure.recommenders.scoring import RecommendationScorer
from src.utils.logger import logger


class ShelterRanker:
    """Combine haversine distances with the recommendation heuristic.

    Shelters with equal scores keep the order in which they were supplied, so
    the ranking is deterministic for a given catalog.
    """

    def __init__(self, scorer: Optional[RecommendationScorer] = None) -> None:
        self._scorer = scorer or RecommendationScorer()

    def with_distance(
        self, shelters: Iterable[Shelter], origin: Coordinate
    ) -> list[ShelterWithDistance]:
        return [
            ShelterWithDistance.from_shelter(shelter, haversine_distance(origin, shelter.coordinate))
            for shelter in shelters
        ]

    def recommend(
        self, shelters: Iterable[Shelter], origin: Coordinate, top_n: int = 3
    ) -> list[Recommendation]:
        if top_n < 0:
            raise InvalidInputError(f"top_n cannot be negative, got {top_n}")

        scored = [
            replace(shelter, recommendation_score=self._scorer.score(shelter))
            for shelter in self.with_distance(shelters, origin)
        ]
        if not scored:
            logger.info("No shelters available to rank")
            return []

        ranked = sorted(scored, key=lambda shelter: -(shelter.recommendation_score or 0.0))

        recommendations: list[Recommendation] = []
        for rank, shelter in enumerate(ranked[:top_n], start=1):
            recommendations.append(
                Recommendation(shelter=shelter, rank=rank, reason=self._scorer.reason(shelter, rank))
            )

        logger.info(
            "Ranked {} shelters around ({}, {}); returning top {}",
            len(scored),
            origin.latitude,
            origin.longitude,
            len(recommendations),
        )
        return recommendations


__all__ = ["ShelterRanker"]
