"""In-memory shelter table and CSV catalog loading."""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Protocol
from uuid import uuid4

import pandas as pd

from src.core.entities import Coordinate, OccupancyLevel, Shelter
from src.core.errors import InvalidInputError
from src.utils.logger import logger

_REQUIRED_COLUMNS = ("name", "address", "latitude", "longitude", "type", "max_capacity")
_AMENITY_SEPARATOR = ";"


class ShelterRepository(Protocol):
    def list(self) -> list[Shelter]:
        ...

    def get(self, shelter_id: str) -> Optional[Shelter]:
        ...

    def update_occupancy(self, shelter_id: str, occupancy: int) -> Optional[Shelter]:
        ...


def _optional_text(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _parse_amenities(value: Any) -> frozenset[str]:
    text = _optional_text(value)
    if text is None:
        return frozenset()
    return frozenset(tag.strip().lower() for tag in text.split(_AMENITY_SEPARATOR) if tag.strip())


def _parse_flag(value: Any) -> bool:
    text = _optional_text(value)
    if text is None:
        return True
    return text.lower() not in {"false", "0", "no", "n"}


class InMemoryShelterRepository:
    """Dictionary-backed shelter table keyed by shelter id."""

    def __init__(
        self,
        shelters: Iterable[Shelter] = (),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._shelters: dict[str, Shelter] = {}
        for shelter in shelters:
            self.add(shelter)

    def __len__(self) -> int:
        return len(self._shelters)

    def list(self) -> list[Shelter]:
        return list(self._shelters.values())

    def get(self, shelter_id: str) -> Optional[Shelter]:
        return self._shelters.get(shelter_id)

    def add(self, shelter: Shelter) -> Shelter:
        if shelter.id in self._shelters:
            raise InvalidInputError(f"Shelter id '{shelter.id}' is already registered.")
        if shelter.last_updated is None:
            shelter = replace(shelter, last_updated=self._clock())
        self._shelters[shelter.id] = shelter
        return shelter

    def create(self, **fields: Any) -> Shelter:
        fields.pop("id", None)
        try:
            shelter = Shelter(id=str(uuid4()), **fields)
        except TypeError as error:
            raise InvalidInputError(f"Invalid shelter data: {error}") from error
        logger.debug("Created shelter {} ({})", shelter.id, shelter.name)
        return self.add(shelter)

    def update_occupancy(self, shelter_id: str, occupancy: int) -> Optional[Shelter]:
        if isinstance(occupancy, bool) or not isinstance(occupancy, int) or occupancy < 0:
            raise InvalidInputError(f"Occupancy must be a non-negative integer, got {occupancy!r}")

        shelter = self._shelters.get(shelter_id)
        if shelter is None:
            return None

        updated = replace(
            shelter,
            current_occupancy=occupancy,
            occupancy_level=OccupancyLevel.from_occupancy(occupancy, shelter.max_capacity),
            last_updated=self._clock(),
        )
        self._shelters[shelter_id] = updated
        logger.info(
            "Shelter {} occupancy set to {}/{} ({})",
            shelter_id,
            occupancy,
            shelter.max_capacity,
            updated.occupancy_level.value if updated.occupancy_level else None,
        )
        return updated

    @classmethod
    def from_dataframe(cls, frame: pd.DataFrame) -> "InMemoryShelterRepository":
        missing = [column for column in _REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise InvalidInputError(f"Shelter catalog is missing columns: {', '.join(missing)}")

        shelters: list[Shelter] = []
        for _, row in frame.iterrows():
            shelter_id = _optional_text(row.get("id")) or str(uuid4())
            current = row.get("current_occupancy")
            shelters.append(
                Shelter(
                    id=shelter_id,
                    name=str(row["name"]).strip(),
                    address=str(row["address"]).strip(),
                    coordinate=Coordinate(latitude=row["latitude"], longitude=row["longitude"]),
                    type=str(row["type"]).strip().lower(),
                    max_capacity=int(row["max_capacity"]),
                    current_occupancy=0 if current is None or pd.isna(current) else int(current),
                    occupancy_level=_optional_text(row.get("occupancy_level")),
                    operating_hours=_optional_text(row.get("operating_hours")) or "",
                    rating=0.0 if pd.isna(row.get("rating", 0.0)) else float(row.get("rating", 0.0)),
                    amenities=_parse_amenities(row.get("amenities")),
                    description=_optional_text(row.get("description")),
                    is_active=_parse_flag(row.get("is_active")),
                )
            )

        return cls(shelters)

    @classmethod
    def from_csv(cls, path: str | Path) -> "InMemoryShelterRepository":
        logger.info("Loading shelter catalog from {}", path)
        frame = pd.read_csv(path, dtype={"id": str})
        repository = cls.from_dataframe(frame)
        logger.info("Loaded {} shelters", len(repository))
        return repository

    @classmethod
    def with_sample_data(cls) -> "InMemoryShelterRepository":
        """Seed the repository with shelters around Gangnam-gu, Seoul."""

        samples = (
            Shelter(
                id="gangnam-office",
                name="Gangnam-gu Office Shelter",
                address="426 Hakdong-ro, Gangnam-gu, Seoul",
                coordinate=Coordinate(37.5172, 127.0473),
                type="public",
                current_occupancy=85,
                max_capacity=100,
                operating_hours="24 hours",
                rating=4.2,
                amenities=frozenset({"wifi", "free"}),
                description="Public shelter with large cooling units and a rest area.",
            ),
            Shelter(
                id="seolleung-station",
                name="Seolleung Station Cooling Area",
                address="Seolleung-ro underground, Gangnam-gu, Seoul",
                coordinate=Coordinate(37.5044, 127.0489),
                type="transport",
                current_occupancy=45,
                max_capacity=80,
                operating_hours="06:00-22:00",
                rating=4.5,
                amenities=frozenset({"free", "convenience_store"}),
                description="Subway concourse waiting area open to the public.",
            ),
            Shelter(
                id="daechi-culture-center",
                name="Daechi Culture Center",
                address="Daechi-dong, Gangnam-gu, Seoul",
                coordinate=Coordinate(37.4946, 127.0631),
                type="public",
                current_occupancy=15,
                max_capacity=120,
                operating_hours="09:00-18:00",
                rating=4.7,
                amenities=frozenset({"wifi", "free", "cafe", "quiet"}),
                description="Comfortable culture center with a range of amenities.",
            ),
            Shelter(
                id="yeoksam-community-center",
                name="Yeoksam-dong Community Center",
                address="Yeoksam-dong, Gangnam-gu, Seoul",
                coordinate=Coordinate(37.5001, 127.0374),
                type="public",
                current_occupancy=20,
                max_capacity=60,
                operating_hours="24 hours",
                rating=4.3,
                amenities=frozenset({"wifi", "free"}),
                description="Community center cooling room open around the clock.",
            ),
            Shelter(
                id="coex-mall",
                name="COEX Mall",
                address="513 Yeongdong-daero, Gangnam-gu, Seoul",
                coordinate=Coordinate(37.5115, 127.0595),
                type="commercial",
                current_occupancy=150,
                max_capacity=300,
                operating_hours="10:00-22:00",
                rating=4.1,
                amenities=frozenset({"parking", "restaurants", "shopping"}),
                description="Large shopping mall with food courts and services.",
            ),
        )
        return cls(samples)


__all__ = ["InMemoryShelterRepository", "ShelterRepository"]
