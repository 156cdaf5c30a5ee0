"""Tests for the in-memory posture session and settings stores."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.core.entities import DetectionSettings, NotificationSettings, UserSettings
from src.core.errors import InvalidInputError
from src.infrastructure.storage.sessions import (
    InMemoryPostureSessionRepository,
    InMemoryUserSettingsRepository,
)

STARTED = datetime(2024, 8, 1, 9, 0, 0)
ENDED = datetime(2024, 8, 1, 10, 0, 0)


def test_session_lifecycle() -> None:
    repository = InMemoryPostureSessionRepository(clock=lambda: STARTED)

    session = repository.create("user-1")
    assert session.start_time == STARTED
    assert repository.current("user-1") == session

    updated = repository.update(session.id, total_warnings=2, turtle_neck_warnings=2)
    assert updated is not None
    assert updated.total_warnings == 2

    ended = repository.end(session.id, ENDED)
    assert ended is not None
    assert ended.end_time == ENDED
    assert repository.current("user-1") is None
    assert repository.list_by_user("user-1") == [ended]


def test_session_update_rejects_immutable_fields() -> None:
    repository = InMemoryPostureSessionRepository()
    session = repository.create(None)

    with pytest.raises(InvalidInputError):
        repository.update(session.id, start_time=ENDED)
    assert repository.update("missing", total_warnings=1) is None


def test_settings_default_and_update() -> None:
    repository = InMemoryUserSettingsRepository()

    assert repository.get("user-1") is None
    settings = repository.get_or_create("user-1")
    assert settings.detection.turtle_neck_sensitivity == 7
    assert settings.detection.nail_biting_sensitivity == 5
    assert settings.notifications.frequency == "5s"

    updated = repository.update(
        "user-1",
        detection=DetectionSettings(nail_biting_enabled=False),
        dark_mode=True,
    )
    assert updated.detection.nail_biting_enabled is False
    assert updated.notifications == settings.notifications
    assert updated.dark_mode is True


def test_settings_defaults_are_copied_per_user() -> None:
    defaults = UserSettings(
        user_id="template",
        notifications=NotificationSettings(frequency="30s"),
    )
    repository = InMemoryUserSettingsRepository(defaults=defaults)

    settings = repository.get_or_create("user-2")

    assert settings.user_id == "user-2"
    assert settings.notifications.frequency == "30s"


def test_default_clock_is_timezone_aware() -> None:
    session = InMemoryPostureSessionRepository().create("user-1")

    assert session.start_time.tzinfo is timezone.utc
