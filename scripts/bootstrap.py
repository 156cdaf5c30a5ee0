"""Make the repository importable from the command-line entry points."""
from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path


def _resolve_project_root() -> Path:
    current = Path(__file__).resolve().parents[1]
    if not (current / "src").exists():
        raise RuntimeError(
            "Could not locate the project root. Expected a 'src' directory next to scripts/."
        )
    return current


@lru_cache(maxsize=1)
def bootstrap_project() -> Path:
    """Put the repository root on ``sys.path`` once and return it."""

    project_root = _resolve_project_root()
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)
    return project_root


def resolve_path(path: Path) -> Path:
    """Interpret relative paths against the repository root."""

    if path.is_absolute():
        return path
    return (bootstrap_project() / path).resolve()
