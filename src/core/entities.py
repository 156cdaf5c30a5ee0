"""Core entities for the heat shelter and posture monitoring domains."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from src.core.errors import InvalidInputError, ensure_finite
from src.utils.logger import logger


class ShelterType(str, Enum):
    PUBLIC = "public"
    COMMERCIAL = "commercial"
    RELIGIOUS = "religious"
    TRANSPORT = "transport"


class OccupancyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_occupancy(cls, current: int, max_capacity: int) -> "OccupancyLevel":
        """Bucket the occupancy rate: above 0.7 is high, above 0.4 is medium."""

        rate = current / max_capacity
        if rate > 0.7:
            return cls.HIGH
        if rate > 0.4:
            return cls.MEDIUM
        return cls.LOW


class PostureState(str, Enum):
    GOOD = "good"
    TURTLE_NECK = "turtle_neck"
    NAIL_BITING = "nail_biting"


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", ensure_finite("latitude", self.latitude))
        object.__setattr__(self, "longitude", ensure_finite("longitude", self.longitude))

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class Shelter:
    """Domain entity describing a cooling shelter open to the public."""

    id: str
    name: str
    address: str
    coordinate: Coordinate
    type: ShelterType
    max_capacity: int
    current_occupancy: int = 0
    occupancy_level: Optional[OccupancyLevel] = None
    operating_hours: str = ""
    rating: float = 0.0
    amenities: frozenset[str] = frozenset()
    description: Optional[str] = None
    is_active: bool = True
    last_updated: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.max_capacity <= 0:
            raise InvalidInputError(
                f"Shelter '{self.name}' must have a positive max_capacity, got {self.max_capacity}."
            )
        if self.current_occupancy < 0:
            raise InvalidInputError(
                f"Shelter '{self.name}' cannot have negative occupancy ({self.current_occupancy})."
            )
        rating = ensure_finite("rating", self.rating)
        if not 0.0 <= rating <= 5.0:
            raise InvalidInputError(f"Shelter '{self.name}' rating must be within 0-5, got {rating}.")

        try:
            shelter_type = ShelterType(self.type)
            supplied = None if self.occupancy_level is None else OccupancyLevel(self.occupancy_level)
        except ValueError as error:
            raise InvalidInputError(f"Shelter '{self.name}': {error}") from error

        level = OccupancyLevel.from_occupancy(self.current_occupancy, self.max_capacity)
        if supplied is not None and supplied is not level:
            logger.warning(
                "Shelter {} labelled {} but {}/{} occupancy derives {}",
                self.id,
                supplied.value,
                self.current_occupancy,
                self.max_capacity,
                level.value,
            )

        object.__setattr__(self, "rating", rating)
        object.__setattr__(self, "type", shelter_type)
        object.__setattr__(self, "amenities", frozenset(self.amenities))
        object.__setattr__(self, "occupancy_level", level)

    @property
    def occupancy_rate(self) -> float:
        return self.current_occupancy / self.max_capacity

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "type": self.type.value,
            "occupancy_level": self.occupancy_level.value,
            "current_occupancy": self.current_occupancy,
            "max_capacity": self.max_capacity,
            "operating_hours": self.operating_hours,
            "rating": self.rating,
            "amenities": sorted(self.amenities),
            "description": self.description,
            "is_active": self.is_active,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }


@dataclass(frozen=True)
class ShelterWithDistance(Shelter):
    """A shelter projected relative to a caller supplied coordinate."""

    distance: float = 0.0
    recommendation_score: Optional[float] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        distance = ensure_finite("distance", self.distance)
        if distance < 0:
            raise InvalidInputError(f"distance cannot be negative, got {distance}")
        object.__setattr__(self, "distance", distance)

    @classmethod
    def from_shelter(cls, shelter: Shelter, distance: float) -> "ShelterWithDistance":
        values = {item.name: getattr(shelter, item.name) for item in fields(Shelter)}
        return cls(**values, distance=distance)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["distance"] = self.distance
        if self.recommendation_score is not None:
            payload["recommendation_score"] = self.recommendation_score
        return payload


@dataclass(frozen=True)
class Recommendation:
    shelter: ShelterWithDistance
    rank: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"shelter": self.shelter.to_dict(), "rank": self.rank, "reason": self.reason}


@dataclass(frozen=True)
class UserFavorite:
    """A shelter bookmarked by a user."""

    id: str
    user_id: str
    shelter_id: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.user_id or not self.shelter_id:
            raise InvalidInputError("Favorites need both a user_id and a shelter_id.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "shelter_id": self.shelter_id,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class WeatherData:
    """Latest heat reading for a named location such as a district."""

    id: str
    location: str
    temperature: float
    updated_at: datetime
    heat_index: Optional[float] = None
    weather_alert: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.location:
            raise InvalidInputError("Weather data needs a location.")
        object.__setattr__(self, "temperature", ensure_finite("temperature", self.temperature))
        if self.heat_index is not None:
            object.__setattr__(self, "heat_index", ensure_finite("heat_index", self.heat_index))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "location": self.location,
            "temperature": self.temperature,
            "heat_index": self.heat_index,
            "weather_alert": self.weather_alert,
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class Keypoint:
    """A labelled 2D body part position reported by a pose estimator."""

    part: str
    x: float
    y: float
    score: float

    def __post_init__(self) -> None:
        if not isinstance(self.part, str) or not self.part:
            raise InvalidInputError(f"Keypoint part must be a non-empty string, got {self.part!r}")
        object.__setattr__(self, "x", ensure_finite(f"{self.part}.x", self.x))
        object.__setattr__(self, "y", ensure_finite(f"{self.part}.y", self.y))
        score = ensure_finite(f"{self.part}.score", self.score)
        if not 0.0 <= score <= 1.0:
            raise InvalidInputError(f"Keypoint '{self.part}' score must be within 0-1, got {score}")
        object.__setattr__(self, "score", score)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Keypoint":
        """Build a keypoint from a PoseNet style ``{part, position: {x, y}, score}`` mapping."""

        if not isinstance(payload, Mapping):
            raise InvalidInputError(f"Keypoint payload must be a mapping, got {type(payload).__name__}")

        position = payload.get("position")
        if isinstance(position, Mapping):
            x, y = position.get("x"), position.get("y")
        else:
            x, y = payload.get("x"), payload.get("y")

        if x is None or y is None or payload.get("score") is None:
            raise InvalidInputError(f"Keypoint payload is missing position or score: {dict(payload)!r}")

        return cls(part=payload.get("part"), x=x, y=y, score=payload["score"])  # type: ignore[arg-type]

    @classmethod
    def parse_many(cls, payloads: Iterable[Mapping[str, Any]]) -> list["Keypoint"]:
        return [cls.from_mapping(payload) for payload in payloads]


@dataclass(frozen=True)
class TurtleNeckReading:
    neck_angle: float = 0.0
    shoulder_angle: float = 0.0
    is_detected: bool = False
    confidence: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "neck_angle": self.neck_angle,
            "shoulder_angle": self.shoulder_angle,
            "is_detected": self.is_detected,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class NailBitingReading:
    hand_to_face_distance: float = 0.0
    is_detected: bool = False
    confidence: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hand_to_face_distance": self.hand_to_face_distance,
            "is_detected": self.is_detected,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class PostureAnalysis:
    """Classification of a single frame with both detector readings."""

    state: PostureState
    turtle_neck: TurtleNeckReading
    nail_biting: NailBitingReading

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "turtle_neck": self.turtle_neck.to_dict(),
            "nail_biting": self.nail_biting.to_dict(),
        }


def _validate_sensitivity(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 10:
        raise InvalidInputError(f"{name} must be an integer between 1 and 10, got {value!r}")


@dataclass(frozen=True)
class DetectionSettings:
    turtle_neck_enabled: bool = True
    nail_biting_enabled: bool = True
    turtle_neck_sensitivity: int = 7
    nail_biting_sensitivity: int = 5

    def __post_init__(self) -> None:
        _validate_sensitivity("turtle_neck_sensitivity", self.turtle_neck_sensitivity)
        _validate_sensitivity("nail_biting_sensitivity", self.nail_biting_sensitivity)


NOTIFICATION_INTERVALS: dict[str, float] = {
    "immediate": 0.0,
    "5s": 5.0,
    "10s": 10.0,
    "30s": 30.0,
}


@dataclass(frozen=True)
class NotificationSettings:
    sound_enabled: bool = True
    visual_enabled: bool = True
    frequency: str = "5s"

    def __post_init__(self) -> None:
        if self.frequency not in NOTIFICATION_INTERVALS:
            allowed = ", ".join(NOTIFICATION_INTERVALS)
            raise InvalidInputError(f"frequency must be one of {allowed}; got {self.frequency!r}")

    @property
    def interval_seconds(self) -> float:
        return NOTIFICATION_INTERVALS[self.frequency]


@dataclass(frozen=True)
class UserSettings:
    user_id: str
    detection: DetectionSettings = field(default_factory=DetectionSettings)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    dark_mode: bool = False


@dataclass(frozen=True)
class PostureSession:
    """Warning counters and good posture time for one monitoring session."""

    id: str
    user_id: Optional[str]
    start_time: datetime
    end_time: Optional[datetime] = None
    good_posture_time: float = 0.0
    turtle_neck_warnings: int = 0
    nail_biting_warnings: int = 0
    total_warnings: int = 0

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "good_posture_time": self.good_posture_time,
            "turtle_neck_warnings": self.turtle_neck_warnings,
            "nail_biting_warnings": self.nail_biting_warnings,
            "total_warnings": self.total_warnings,
        }


@dataclass(frozen=True)
class SessionSummary:
    user_id: str
    session_count: int
    good_posture_time: float
    total_warnings: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "session_count": self.session_count,
            "good_posture_time": self.good_posture_time,
            "total_warnings": self.total_warnings,
        }


__all__ = [
    "Coordinate",
    "DetectionSettings",
    "Keypoint",
    "NOTIFICATION_INTERVALS",
    "NailBitingReading",
    "NotificationSettings",
    "OccupancyLevel",
    "PostureAnalysis",
    "PostureSession",
    "PostureState",
    "Recommendation",
    "SessionSummary",
    "Shelter",
    "ShelterType",
    "ShelterWithDistance",
    "TurtleNeckReading",
    "UserFavorite",
    "UserSettings",
    "WeatherData",
]
