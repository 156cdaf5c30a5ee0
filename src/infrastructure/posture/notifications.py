"""Rate limiting for posture warnings shown to the user."""
from __future__ import annotations

from typing import Optional

from src.core.entities import NotificationSettings, PostureState


class NotificationThrottle:
    """Allow at most one warning per configured interval."""

    def __init__(self, settings: Optional[NotificationSettings] = None) -> None:
        self._settings = settings or NotificationSettings()
        self._last_sent: Optional[float] = None

    @property
    def settings(self) -> NotificationSettings:
        return self._settings

    def should_notify(self, state: PostureState, now: float) -> bool:
        if state is PostureState.GOOD:
            return False
        if not (self._settings.visual_enabled or self._settings.sound_enabled):
            return False

        if self._last_sent is not None and now - self._last_sent <= self._settings.interval_seconds:
            return False

        self._last_sent = now
        return True


__all__ = ["NotificationThrottle"]
