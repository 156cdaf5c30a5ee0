"""Pytest configuration and shared fixtures for the project."""
from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core.entities import Keypoint  # noqa: E402

FrameFactory = Callable[..., list[Keypoint]]


@pytest.fixture
def make_frame() -> FrameFactory:
    """Build a frame of keypoints for an upright person facing the camera.

    ``neck_angle`` tilts the nose away from the ear midpoint by that many degrees,
    ``wrist`` places the left wrist at the given position and ``omit`` drops parts.
    """

    def factory(
        neck_angle: float = 0.0,
        wrist: Optional[tuple[float, float]] = None,
        score: float = 0.9,
        wrist_score: Optional[float] = None,
        omit: tuple[str, ...] = (),
    ) -> list[Keypoint]:
        ear_x, ear_y = 320.0, 200.0
        nose_x = ear_x + 40.0 * math.tan(math.radians(neck_angle))
        positions = {
            "nose": (nose_x, ear_y + 40.0),
            "leftEar": (ear_x - 30.0, ear_y),
            "rightEar": (ear_x + 30.0, ear_y),
            "leftShoulder": (ear_x - 80.0, ear_y + 120.0),
            "rightShoulder": (ear_x + 80.0, ear_y + 120.0),
        }
        keypoints = [
            Keypoint(part=part, x=x, y=y, score=score)
            for part, (x, y) in positions.items()
            if part not in omit
        ]
        if wrist is not None and "leftWrist" not in omit:
            keypoints.append(
                Keypoint(
                    part="leftWrist",
                    x=wrist[0],
                    y=wrist[1],
                    score=score if wrist_score is None else wrist_score,
                )
            )
        return keypoints

    return factory
