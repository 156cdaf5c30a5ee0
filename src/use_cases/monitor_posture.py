"""Use case for tracking posture warnings over a monitoring session."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from src.core.entities import (
    DetectionSettings,
    Keypoint,
    PostureAnalysis,
    PostureSession,
    PostureState,
    SessionSummary,
    UserSettings,
)
from src.core.errors import InvalidInputError, SessionNotFoundError, ensure_finite
from src.infrastructure.posture.notifications import NotificationThrottle
from src.utils.logger import logger

ANONYMOUS_USER = "anonymous"


class PostureClassifier(Protocol):
    def analyze(self, keypoints: Iterable[Keypoint], settings: DetectionSettings) -> PostureAnalysis:
        ...


class SessionStore(Protocol):
    def create(self, user_id: Optional[str]) -> PostureSession:
        ...

    def get(self, session_id: str) -> Optional[PostureSession]:
        ...

    def update(self, session_id: str, **changes: Any) -> Optional[PostureSession]:
        ...

    def end(self, session_id: str, when: Optional[datetime] = None) -> Optional[PostureSession]:
        ...

    def list_by_user(self, user_id: str) -> list[PostureSession]:
        ...


class SettingsStore(Protocol):
    def get_or_create(self, user_id: str) -> UserSettings:
        ...


@dataclass(frozen=True)
class FrameReport:
    session: PostureSession
    analysis: PostureAnalysis
    notify: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session.id,
            "analysis": self.analysis.to_dict(),
            "notify": self.notify,
        }


@dataclass
class _SessionTracker:
    throttle: NotificationThrottle
    last_state: PostureState = PostureState.GOOD
    last_timestamp: Optional[float] = None


class MonitorPostureUseCase:
    """Classify frames and keep the session counters up to date."""

    def __init__(
        self,
        classifier: PostureClassifier,
        sessions: SessionStore,
        settings: SettingsStore,
    ) -> None:
        self._classifier = classifier
        self._sessions = sessions
        self._settings = settings
        self._trackers: dict[str, _SessionTracker] = {}

    def start_session(self, user_id: Optional[str] = None) -> PostureSession:
        session = self._sessions.create(user_id)
        user_settings = self._settings.get_or_create(user_id or ANONYMOUS_USER)
        self._trackers[session.id] = _SessionTracker(
            throttle=NotificationThrottle(user_settings.notifications)
        )
        return session

    def process_frame(
        self, session_id: str, keypoints: Iterable[Keypoint], timestamp: float
    ) -> FrameReport:
        session = self._sessions.get(session_id)
        if session is None or not session.is_active:
            raise SessionNotFoundError(f"No active posture session '{session_id}'")

        user_settings = self._settings.get_or_create(session.user_id or ANONYMOUS_USER)
        timestamp = ensure_finite("timestamp", timestamp)
        tracker = self._trackers.get(session_id)
        if tracker is None:
            tracker = _SessionTracker(throttle=NotificationThrottle(user_settings.notifications))
            self._trackers[session_id] = tracker

        if tracker.last_timestamp is not None and timestamp < tracker.last_timestamp:
            raise InvalidInputError(
                f"Frame timestamp {timestamp} is earlier than the previous frame ({tracker.last_timestamp})"
            )

        analysis = self._classifier.analyze(keypoints, user_settings.detection)
        state = analysis.state

        changes: dict[str, Any] = {}
        if tracker.last_state is PostureState.GOOD and tracker.last_timestamp is not None:
            changes["good_posture_time"] = session.good_posture_time + (
                timestamp - tracker.last_timestamp
            )

        if state is not PostureState.GOOD and state is not tracker.last_state:
            changes["total_warnings"] = session.total_warnings + 1
            if state is PostureState.TURTLE_NECK:
                changes["turtle_neck_warnings"] = session.turtle_neck_warnings + 1
            else:
                changes["nail_biting_warnings"] = session.nail_biting_warnings + 1
            logger.info("Session {} warning: {}", session_id, state.value)

        if changes:
            updated = self._sessions.update(session_id, **changes)
            if updated is None:
                raise SessionNotFoundError(f"No active posture session '{session_id}'")
            session = updated

        tracker.last_state = state
        tracker.last_timestamp = timestamp
        notify = tracker.throttle.should_notify(state, timestamp)
        return FrameReport(session=session, analysis=analysis, notify=notify)

    def end_session(self, session_id: str, when: Optional[datetime] = None) -> PostureSession:
        session = self._sessions.end(session_id, when)
        if session is None:
            raise SessionNotFoundError(f"No posture session '{session_id}'")
        self._trackers.pop(session_id, None)
        return session

    def summarize(self, user_id: str) -> SessionSummary:
        sessions = self._sessions.list_by_user(user_id)
        return SessionSummary(
            user_id=user_id,
            session_count=len(sessions),
            good_posture_time=sum(session.good_posture_time for session in sessions),
            total_warnings=sum(session.total_warnings for session in sessions),
        )


__all__ = ["FrameReport", "MonitorPostureUseCase"]
