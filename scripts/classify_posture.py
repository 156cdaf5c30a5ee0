"""Replay recorded pose keypoints through a posture monitoring session."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT_STR = str(Path(__file__).resolve().parents[1])
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from scripts.bootstrap import bootstrap_project, resolve_path

_PROJECT_ROOT = bootstrap_project()

from src.core.entities import Keypoint, UserSettings  # noqa: E402
from src.core.errors import InvalidInputError  # noqa: E402
from src.infrastructure.posture.analyzer import PostureAnalyzer  # noqa: E402
from src.infrastructure.storage import (  # noqa: E402
    InMemoryPostureSessionRepository,
    InMemoryUserSettingsRepository,
)
from src.use_cases.monitor_posture import MonitorPostureUseCase  # noqa: E402
from src.utils.config import (  # noqa: E402
    build_detection_settings,
    build_notification_settings,
    get_log_level,
    load_config,
)
from src.utils.logger import configure_logging, logger  # noqa: E402

# PoseNet runs at roughly 5 frames per second in the browser client.
DEFAULT_FRAME_INTERVAL = 0.2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify posture for recorded keypoint frames")
    parser.add_argument("frames", type=Path, help="JSON file with a list of frames")
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    parser.add_argument("--user", default="default-user", help="User id for the session")
    return parser.parse_args(argv)


def load_frames(path: Path) -> list[tuple[float, list[Keypoint]]]:
    """Read frames given either as keypoint lists or ``{timestamp, keypoints}`` objects."""

    with path.open("r", encoding="utf-8") as file:
        data: Any = json.load(file)

    if not isinstance(data, list):
        raise InvalidInputError("The frames file must contain a JSON list.")

    frames: list[tuple[float, list[Keypoint]]] = []
    for index, entry in enumerate(data):
        if isinstance(entry, dict):
            timestamp = float(entry.get("timestamp", index * DEFAULT_FRAME_INTERVAL))
            raw_keypoints = entry.get("keypoints", [])
        else:
            timestamp = index * DEFAULT_FRAME_INTERVAL
            raw_keypoints = entry
        if not isinstance(raw_keypoints, list):
            raise InvalidInputError(f"Frame {index} keypoints must be a list.")
        frames.append((timestamp, Keypoint.parse_many(raw_keypoints)))
    return frames


def run(args: argparse.Namespace) -> dict[str, Any]:
    config = load_config(resolve_path(args.config))
    configure_logging(get_log_level(config))

    defaults = UserSettings(
        user_id=args.user,
        detection=build_detection_settings(config),
        notifications=build_notification_settings(config),
    )
    use_case = MonitorPostureUseCase(
        PostureAnalyzer(),
        InMemoryPostureSessionRepository(),
        InMemoryUserSettingsRepository(defaults=defaults),
    )

    frames = load_frames(resolve_path(args.frames))
    session = use_case.start_session(args.user)
    reports = [
        use_case.process_frame(session.id, keypoints, timestamp).to_dict()
        for timestamp, keypoints in frames
    ]
    ended = use_case.end_session(session.id)
    logger.info("Processed {} frames", len(reports))

    return {
        "frames": reports,
        "session": ended.to_dict(),
        "summary": use_case.summarize(args.user).to_dict(),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        payload = run(args)
    except (ValueError, LookupError) as error:
        logger.error("Could not classify posture: {}", error)
        return 1

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
