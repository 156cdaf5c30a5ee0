"""Geometric posture heuristics over single-frame pose keypoints."""
from __future__ import annotations

import math
from typing import Iterable, Optional

from src.core.entities import (
    DetectionSettings,
    Keypoint,
    NailBitingReading,
    PostureAnalysis,
    PostureState,
    TurtleNeckReading,
)
from src.core.errors import InvalidInputError
from src.utils.logger import logger

MIN_DETECTION_CONFIDENCE = 0.5
MIN_WRIST_CONFIDENCE = 0.5

_TURTLE_NECK_PARTS = ("nose", "leftShoulder", "rightShoulder", "leftEar", "rightEar")
_WRIST_PARTS = ("leftWrist", "rightWrist")


def _index_keypoints(keypoints: Iterable[Keypoint]) -> dict[str, Keypoint]:
    indexed: dict[str, Keypoint] = {}
    for keypoint in keypoints:
        if not isinstance(keypoint, Keypoint):
            raise InvalidInputError(f"Expected Keypoint instances, got {type(keypoint).__name__}")
        indexed.setdefault(keypoint.part, keypoint)
    return indexed


def _check_sensitivity(name: str, sensitivity: int) -> None:
    if isinstance(sensitivity, bool) or not isinstance(sensitivity, int) or not 1 <= sensitivity <= 10:
        raise InvalidInputError(f"{name} must be an integer between 1 and 10, got {sensitivity!r}")


def turtle_neck_threshold(sensitivity: int) -> float:
    """Neck angle in degrees above which the head counts as pushed forward."""

    return 15 + (10 - sensitivity) * 2


def nail_biting_threshold(sensitivity: int) -> float:
    """Wrist-to-nose distance in pixels under which a hand counts as at the mouth."""

    return 150 - (sensitivity - 1) * 15


class PostureAnalyzer:
    """Detect turtle neck and nail biting from one frame of keypoints.

    The analyzer holds no state; every call depends only on its arguments.
    """

    def detect_turtle_neck(
        self, keypoints: Iterable[Keypoint], sensitivity: int = 7
    ) -> TurtleNeckReading:
        _check_sensitivity("turtle_neck_sensitivity", sensitivity)
        indexed = _index_keypoints(keypoints)
        if any(part not in indexed for part in _TURTLE_NECK_PARTS):
            return TurtleNeckReading()

        nose = indexed["nose"]
        left_shoulder = indexed["leftShoulder"]
        right_shoulder = indexed["rightShoulder"]
        left_ear = indexed["leftEar"]
        right_ear = indexed["rightEar"]

        ear_x = (left_ear.x + right_ear.x) / 2
        ear_y = (left_ear.y + right_ear.y) / 2

        neck_angle = math.degrees(math.atan2(nose.x - ear_x, nose.y - ear_y))
        shoulder_angle = math.degrees(
            math.atan2(right_shoulder.y - left_shoulder.y, right_shoulder.x - left_shoulder.x)
        )

        is_detected = abs(neck_angle) > turtle_neck_threshold(sensitivity)
        confidence = min(indexed[part].score for part in _TURTLE_NECK_PARTS)

        return TurtleNeckReading(
            neck_angle=neck_angle,
            shoulder_angle=shoulder_angle,
            is_detected=is_detected,
            confidence=confidence,
        )

    def detect_nail_biting(
        self, keypoints: Iterable[Keypoint], sensitivity: int = 5
    ) -> NailBitingReading:
        _check_sensitivity("nail_biting_sensitivity", sensitivity)
        indexed = _index_keypoints(keypoints)
        nose = indexed.get("nose")
        if nose is None:
            return NailBitingReading()

        closest: Optional[tuple[float, float]] = None
        for part in _WRIST_PARTS:
            wrist = indexed.get(part)
            if wrist is None or wrist.score <= MIN_WRIST_CONFIDENCE:
                continue
            distance = math.hypot(wrist.x - nose.x, wrist.y - nose.y)
            if closest is None or distance < closest[0]:
                closest = (distance, min(nose.score, wrist.score))

        if closest is None:
            return NailBitingReading()

        distance, confidence = closest
        return NailBitingReading(
            hand_to_face_distance=distance,
            is_detected=distance < nail_biting_threshold(sensitivity),
            confidence=confidence,
        )

    def classify(
        self,
        keypoints: Iterable[Keypoint],
        turtle_neck_sensitivity: int,
        nail_biting_sensitivity: int,
        turtle_neck_enabled: bool,
        nail_biting_enabled: bool,
    ) -> PostureState:
        settings = DetectionSettings(
            turtle_neck_enabled=turtle_neck_enabled,
            nail_biting_enabled=nail_biting_enabled,
            turtle_neck_sensitivity=turtle_neck_sensitivity,
            nail_biting_sensitivity=nail_biting_sensitivity,
        )
        return self.analyze(keypoints, settings).state

    def analyze(self, keypoints: Iterable[Keypoint], settings: DetectionSettings) -> PostureAnalysis:
        frame = list(keypoints)
        turtle_neck = self.detect_turtle_neck(frame, settings.turtle_neck_sensitivity)
        nail_biting = self.detect_nail_biting(frame, settings.nail_biting_sensitivity)

        state = PostureState.GOOD
        if (
            settings.turtle_neck_enabled
            and turtle_neck.is_detected
            and turtle_neck.confidence > MIN_DETECTION_CONFIDENCE
        ):
            state = PostureState.TURTLE_NECK
        # Nail biting is checked last and replaces a turtle neck result.
        if (
            settings.nail_biting_enabled
            and nail_biting.is_detected
            and nail_biting.confidence > MIN_DETECTION_CONFIDENCE
        ):
            state = PostureState.NAIL_BITING

        logger.debug(
            "Frame classified as {} (neck {:.1f} deg, hand {:.1f} px)",
            state.value,
            turtle_neck.neck_angle,
            nail_biting.hand_to_face_distance,
        )
        return PostureAnalysis(state=state, turtle_neck=turtle_neck, nail_biting=nail_biting)


__all__ = [
    "MIN_DETECTION_CONFIDENCE",
    "PostureAnalyzer",
    "nail_biting_threshold",
    "turtle_neck_threshold",
]
