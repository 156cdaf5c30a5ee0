"""Typed access to the YAML configuration file."""
from __future__ import annotations

from pathlib import Path
from typing import TypedDict, cast

import yaml

from src.core.entities import Coordinate, DetectionSettings, NotificationSettings
from src.infrastructure.geo.locator import DEFAULT_FALLBACK, UserLocator


class PathsConfig(TypedDict, total=False):
    shelter_catalog: str


class LocationConfig(TypedDict, total=False):
    fallback_latitude: float
    fallback_longitude: float
    user_agent: str
    timeout: int
    language: str
    country_codes: str


class RecommendationsConfig(TypedDict, total=False):
    top_n: int
    active_only: bool


class PostureConfig(TypedDict, total=False):
    turtle_neck_enabled: bool
    nail_biting_enabled: bool
    turtle_neck_sensitivity: int
    nail_biting_sensitivity: int
    sound_notifications_enabled: bool
    visual_notifications_enabled: bool
    notification_frequency: str


class LoggingConfig(TypedDict, total=False):
    level: str


class AppConfig(TypedDict, total=False):
    paths: PathsConfig
    location: LocationConfig
    recommendations: RecommendationsConfig
    posture: PostureConfig
    logging: LoggingConfig


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as file:
        data = yaml.safe_load(file)

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise ValueError("The configuration file must contain a mapping at the top level.")

    return cast(AppConfig, data)


def get_log_level(config: AppConfig) -> str:
    logging_config = cast(LoggingConfig, config.get("logging", {}))
    return str(logging_config.get("level", "INFO"))


def get_top_n(config: AppConfig) -> int:
    recommendations = cast(RecommendationsConfig, config.get("recommendations", {}))
    return int(recommendations.get("top_n", 3))


def build_detection_settings(config: AppConfig) -> DetectionSettings:
    posture = cast(PostureConfig, config.get("posture", {}))
    return DetectionSettings(
        turtle_neck_enabled=bool(posture.get("turtle_neck_enabled", True)),
        nail_biting_enabled=bool(posture.get("nail_biting_enabled", True)),
        turtle_neck_sensitivity=int(posture.get("turtle_neck_sensitivity", 7)),
        nail_biting_sensitivity=int(posture.get("nail_biting_sensitivity", 5)),
    )


def build_notification_settings(config: AppConfig) -> NotificationSettings:
    posture = cast(PostureConfig, config.get("posture", {}))
    return NotificationSettings(
        sound_enabled=bool(posture.get("sound_notifications_enabled", True)),
        visual_enabled=bool(posture.get("visual_notifications_enabled", True)),
        frequency=str(posture.get("notification_frequency", "5s")),
    )


def build_user_locator(config: AppConfig) -> UserLocator:
    location = cast(LocationConfig, config.get("location", {}))
    fallback = Coordinate(
        latitude=location.get("fallback_latitude", DEFAULT_FALLBACK.latitude),
        longitude=location.get("fallback_longitude", DEFAULT_FALLBACK.longitude),
    )
    return UserLocator(
        fallback=fallback,
        user_agent=location.get("user_agent", "heat-shelter-finder"),
        timeout=int(location.get("timeout", 5)),
        language=location.get("language", "ko"),
        country_codes=location.get("country_codes", "kr"),
    )


__all__ = [
    "AppConfig",
    "build_detection_settings",
    "build_notification_settings",
    "build_user_locator",
    "get_log_level",
    "get_top_n",
    "load_config",
]
