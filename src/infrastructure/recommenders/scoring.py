"""Additive desirability heuristic for shelters near the user."""
from __future__ import annotations

from typing import Callable

from src.core.entities import OccupancyLevel, ShelterWithDistance
from src.utils.logger import logger

_Rule = tuple[str, Callable[[ShelterWithDistance], bool]]


def _is_open_all_day(shelter: ShelterWithDistance) -> bool:
    return "24" in shelter.operating_hours


class RecommendationScorer:
    """Score shelters and explain why they were recommended."""

    def __init__(self, max_reasons: int = 3) -> None:
        self._base_score = 100.0
        self._distance_penalty_per_km = 10.0
        self._occupancy_adjustments = {
            OccupancyLevel.LOW: 20.0,
            OccupancyLevel.MEDIUM: 10.0,
            OccupancyLevel.HIGH: -10.0,
        }
        self._rating_weight = 5.0
        self._all_day_bonus = 15.0
        self._amenity_weight = 3.0
        self._max_reasons = max_reasons
        # Evaluated in order; the first matches win.
        self._reason_rules: tuple[_Rule, ...] = (
            ("close distance", lambda shelter: shelter.distance < 1),
            ("ample space", lambda shelter: shelter.occupancy_level is OccupancyLevel.LOW),
            ("24-hour availability", _is_open_all_day),
            ("high satisfaction", lambda shelter: shelter.rating > 4.5),
            ("Wi-Fi available", lambda shelter: "wifi" in shelter.amenities),
            ("free admission", lambda shelter: "free" in shelter.amenities),
        )

    def score(self, shelter: ShelterWithDistance) -> float:
        total = self._base_score
        total -= shelter.distance * self._distance_penalty_per_km
        if shelter.occupancy_level is not None:
            total += self._occupancy_adjustments[shelter.occupancy_level]
        total += shelter.rating * self._rating_weight
        if _is_open_all_day(shelter):
            total += self._all_day_bonus
        total += len(shelter.amenities) * self._amenity_weight

        score = max(0.0, total)
        logger.debug("Scored shelter '{}' at {:.2f} ({:.3f} km)", shelter.name, score, shelter.distance)
        return score

    def reason(self, shelter: ShelterWithDistance, rank: int) -> str:
        phrases = [phrase for phrase, applies in self._reason_rules if applies(shelter)]
        return ", ".join(phrases[: self._max_reasons])


__all__ = ["RecommendationScorer"]
