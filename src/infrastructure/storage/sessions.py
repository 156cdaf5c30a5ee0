"""In-memory stores for posture sessions and per-user settings."""
from __future__ import annotations

from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

from src.core.entities import DetectionSettings, NotificationSettings, PostureSession, UserSettings
from src.core.errors import InvalidInputError
from src.utils.logger import logger

_MUTABLE_SESSION_FIELDS = frozenset(
    item.name for item in fields(PostureSession) if item.name not in {"id", "start_time"}
)


class InMemoryPostureSessionRepository:
    """Posture sessions keyed by id."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._sessions: dict[str, PostureSession] = {}

    def create(self, user_id: Optional[str]) -> PostureSession:
        session = PostureSession(id=str(uuid4()), user_id=user_id, start_time=self._clock())
        self._sessions[session.id] = session
        logger.info("Started posture session {} for user {}", session.id, user_id)
        return session

    def get(self, session_id: str) -> Optional[PostureSession]:
        return self._sessions.get(session_id)

    def update(self, session_id: str, **changes: Any) -> Optional[PostureSession]:
        unknown = set(changes) - _MUTABLE_SESSION_FIELDS
        if unknown:
            raise InvalidInputError(f"Cannot update session fields: {', '.join(sorted(unknown))}")

        session = self._sessions.get(session_id)
        if session is None:
            return None

        updated = replace(session, **changes)
        self._sessions[session_id] = updated
        return updated

    def end(self, session_id: str, when: Optional[datetime] = None) -> Optional[PostureSession]:
        ended = self.update(session_id, end_time=when or self._clock())
        if ended is not None:
            logger.info(
                "Ended posture session {} with {} warnings", session_id, ended.total_warnings
            )
        return ended

    def list_by_user(self, user_id: str) -> list[PostureSession]:
        return [session for session in self._sessions.values() if session.user_id == user_id]

    def current(self, user_id: str) -> Optional[PostureSession]:
        for session in self._sessions.values():
            if session.user_id == user_id and session.is_active:
                return session
        return None


class InMemoryUserSettingsRepository:
    """Detection and notification preferences keyed by user id."""

    def __init__(self, defaults: Optional[UserSettings] = None) -> None:
        self._defaults = defaults
        self._settings: dict[str, UserSettings] = {}

    def get(self, user_id: str) -> Optional[UserSettings]:
        return self._settings.get(user_id)

    def get_or_create(self, user_id: str) -> UserSettings:
        settings = self._settings.get(user_id)
        if settings is None:
            if self._defaults is not None:
                settings = replace(self._defaults, user_id=user_id)
            else:
                settings = UserSettings(user_id=user_id)
            self._settings[user_id] = settings
            logger.debug("Created default settings for user {}", user_id)
        return settings

    def update(
        self,
        user_id: str,
        *,
        detection: Optional[DetectionSettings] = None,
        notifications: Optional[NotificationSettings] = None,
        dark_mode: Optional[bool] = None,
    ) -> UserSettings:
        current = self.get_or_create(user_id)
        updated = replace(
            current,
            detection=detection or current.detection,
            notifications=notifications or current.notifications,
            dark_mode=current.dark_mode if dark_mode is None else dark_mode,
        )
        self._settings[user_id] = updated
        return updated


__all__ = ["InMemoryPostureSessionRepository", "InMemoryUserSettingsRepository"]
