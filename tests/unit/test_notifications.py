"""Unit tests for the posture notification throttle."""
from __future__ import annotations

from src.core.entities import NotificationSettings, PostureState
from src.infrastructure.posture.notifications import NotificationThrottle


def test_throttle_waits_for_configured_interval() -> None:
    throttle = NotificationThrottle(NotificationSettings(frequency="5s"))

    assert throttle.should_notify(PostureState.TURTLE_NECK, 100.0) is True
    assert throttle.should_notify(PostureState.TURTLE_NECK, 103.0) is False
    assert throttle.should_notify(PostureState.NAIL_BITING, 105.0) is False
    assert throttle.should_notify(PostureState.NAIL_BITING, 105.5) is True


def test_throttle_never_notifies_for_good_posture() -> None:
    throttle = NotificationThrottle(NotificationSettings(frequency="immediate"))

    assert throttle.should_notify(PostureState.GOOD, 1.0) is False
    assert throttle.should_notify(PostureState.TURTLE_NECK, 1.0) is True
    assert throttle.should_notify(PostureState.TURTLE_NECK, 1.2) is True


def test_throttle_is_silent_when_all_channels_disabled() -> None:
    throttle = NotificationThrottle(NotificationSettings(sound_enabled=False, visual_enabled=False))

    assert throttle.should_notify(PostureState.NAIL_BITING, 0.0) is False
