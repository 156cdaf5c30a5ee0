"""Unit tests for the shelter recommendation heuristic."""
from __future__ import annotations

import pytest

from src.core.entities import Coordinate, ShelterWithDistance
from src.infrastructure.recommenders.scoring import RecommendationScorer


def make_shelter(**overrides) -> ShelterWithDistance:
    values = {
        "id": "s1",
        "name": "Test shelter",
        "address": "Somewhere",
        "coordinate": Coordinate(37.5, 127.0),
        "type": "public",
        "max_capacity": 100,
        "current_occupancy": 80,
        "operating_hours": "09:00-18:00",
        "rating": 0.0,
        "amenities": frozenset(),
        "distance": 0.0,
    }
    values.update(overrides)
    return ShelterWithDistance(**values)


def test_score_adds_every_component() -> None:
    scorer = RecommendationScorer()
    shelter = make_shelter(
        distance=1.5,
        current_occupancy=10,
        rating=4.0,
        operating_hours="24 hours",
        amenities=frozenset({"wifi", "free"}),
    )

    # 100 - 15 + 20 (low) + 20 (rating) + 15 (24h) + 6 (amenities)
    assert scorer.score(shelter) == pytest.approx(146.0)


@pytest.mark.parametrize(
    ("occupancy", "expected"),
    [(40, 120.0), (41, 110.0), (70, 110.0), (71, 90.0)],
)
def test_score_follows_occupancy_level_buckets(occupancy: int, expected: float) -> None:
    scorer = RecommendationScorer()
    # A stale label never overrides the bucket derived from the head count.
    shelter = make_shelter(current_occupancy=occupancy, occupancy_level="low")

    assert scorer.score(shelter) == pytest.approx(expected)


def test_score_is_clamped_at_zero() -> None:
    scorer = RecommendationScorer()
    far_away = make_shelter(distance=500.0)

    assert scorer.score(far_away) == 0.0


def test_score_never_increases_with_distance() -> None:
    scorer = RecommendationScorer()
    scores = [scorer.score(make_shelter(distance=distance)) for distance in (0, 0.5, 1, 5, 12, 50)]

    assert scores == sorted(scores, reverse=True)
    assert all(score >= 0 for score in scores)


def test_reason_lists_first_three_matches_in_priority_order() -> None:
    scorer = RecommendationScorer()
    shelter = make_shelter(
        distance=0.4,
        current_occupancy=5,
        operating_hours="24 hours",
        rating=4.8,
        amenities=frozenset({"wifi", "free"}),
    )

    assert scorer.reason(shelter, rank=1) == "close distance, ample space, 24-hour availability"


def test_reason_skips_unmatched_conditions() -> None:
    scorer = RecommendationScorer()
    shelter = make_shelter(distance=3.0, rating=4.6, amenities=frozenset({"free"}))

    assert scorer.reason(shelter, rank=2) == "high satisfaction, free admission"


def test_reason_is_empty_when_nothing_matches() -> None:
    scorer = RecommendationScorer()

    assert scorer.reason(make_shelter(distance=2.0, rating=4.5), rank=3) == ""
