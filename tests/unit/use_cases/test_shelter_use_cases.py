"""Tests for the shelter listing, ranking and occupancy use cases."""
from __future__ import annotations

from dataclasses import replace

import pytest

from src.core.entities import Coordinate, OccupancyLevel
from src.core.errors import InvalidInputError, ShelterNotFoundError
from src.infrastructure.recommenders.shelter_ranker import ShelterRanker
from src.infrastructure.storage.shelters import InMemoryShelterRepository
from src.use_cases.find_nearby_shelters import FindNearbySheltersUseCase
from src.use_cases.recommend_shelters import RecommendSheltersUseCase
from src.use_cases.update_occupancy import UpdateOccupancyUseCase

ORIGIN = Coordinate(37.5172, 127.0473)


def repository_with_closed_shelter() -> InMemoryShelterRepository:
    shelters = InMemoryShelterRepository.with_sample_data().list()
    shelters[3] = replace(shelters[3], is_active=False)
    return InMemoryShelterRepository(shelters)


def test_recommendations_skip_inactive_shelters() -> None:
    repository = repository_with_closed_shelter()
    use_case = RecommendSheltersUseCase(repository, ShelterRanker())

    recommendations = use_case.execute(ORIGIN, top_n=3)

    ids = [item.shelter.id for item in recommendations]
    assert "yeoksam-community-center" not in ids
    assert ids[0] == "gangnam-office"


def test_nearby_lists_every_shelter_unless_filtered() -> None:
    repository = repository_with_closed_shelter()
    use_case = FindNearbySheltersUseCase(repository, ShelterRanker())

    assert len(use_case.execute(ORIGIN)) == 5
    assert len(use_case.execute(ORIGIN, active_only=True)) == 4


def test_recommendations_on_empty_catalog_are_empty() -> None:
    use_case = RecommendSheltersUseCase(InMemoryShelterRepository(), ShelterRanker())

    assert use_case.execute(ORIGIN) == []


def test_update_occupancy_changes_future_rankings() -> None:
    repository = InMemoryShelterRepository.with_sample_data()
    update = UpdateOccupancyUseCase(repository)

    updated = update.execute("yeoksam-community-center", 60)

    assert updated.occupancy_level is OccupancyLevel.HIGH
    top = RecommendSheltersUseCase(repository, ShelterRanker()).execute(ORIGIN, top_n=1)
    assert top[0].shelter.id == "gangnam-office"


def test_update_occupancy_for_unknown_shelter_fails() -> None:
    with pytest.raises(ShelterNotFoundError):
        UpdateOccupancyUseCase(InMemoryShelterRepository()).execute("missing", 1)


def test_nearby_defaults_to_nearest_first() -> None:
    use_case = FindNearbySheltersUseCase(InMemoryShelterRepository.with_sample_data(), ShelterRanker())

    nearby = use_case.execute(ORIGIN)

    assert [shelter.id for shelter in nearby] == [
        "gangnam-office",
        "coex-mall",
        "seolleung-station",
        "yeoksam-community-center",
        "daechi-culture-center",
    ]
    distances = [shelter.distance for shelter in nearby]
    assert distances == sorted(distances)


@pytest.mark.parametrize(
    ("sort_by", "expected"),
    [
        (
            "occupancy",
            ["daechi-culture-center", "yeoksam-community-center", "seolleung-station",
             "coex-mall", "gangnam-office"],
        ),
        (
            "rating",
            ["daechi-culture-center", "seolleung-station", "yeoksam-community-center",
             "gangnam-office", "coex-mall"],
        ),
        (
            "name",
            ["coex-mall", "daechi-culture-center", "gangnam-office", "seolleung-station",
             "yeoksam-community-center"],
        ),
    ],
)
def test_nearby_sort_orders(sort_by: str, expected: list[str]) -> None:
    use_case = FindNearbySheltersUseCase(InMemoryShelterRepository.with_sample_data(), ShelterRanker())

    assert [shelter.id for shelter in use_case.execute(ORIGIN, sort_by=sort_by)] == expected


def test_nearby_search_matches_name_or_address_case_insensitively() -> None:
    use_case = FindNearbySheltersUseCase(InMemoryShelterRepository.with_sample_data(), ShelterRanker())

    assert [shelter.id for shelter in use_case.execute(ORIGIN, query="STATION")] == [
        "seolleung-station"
    ]
    assert [shelter.id for shelter in use_case.execute(ORIGIN, query="daechi-dong")] == [
        "daechi-culture-center"
    ]
    assert len(use_case.execute(ORIGIN, query="gangnam-gu")) == 5
    assert use_case.execute(ORIGIN, query="busan") == []


def test_nearby_rejects_unknown_sort_key() -> None:
    use_case = FindNearbySheltersUseCase(InMemoryShelterRepository(), ShelterRanker())

    with pytest.raises(InvalidInputError):
        use_case.execute(ORIGIN, sort_by="popularity")


def test_with_distance_keeps_input_order() -> None:
    shelters = InMemoryShelterRepository.with_sample_data().list()

    projected = ShelterRanker().with_distance(shelters, ORIGIN)

    assert [shelter.id for shelter in projected] == [shelter.id for shelter in shelters]
