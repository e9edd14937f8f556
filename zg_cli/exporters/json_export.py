"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from zg_cli.core.history import health_samples
from zg_cli.core.models import WorkoutSession


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n")
    return path


def write_health_export(path: Path, sessions: Iterable[WorkoutSession], calories_per_minute: float) -> Path:
    """Write workout/energy samples for a health-store import."""
    samples = health_samples(sessions, calories_per_minute=calories_per_minute)
    return write_json(path, {"workouts": samples, "count": len(samples)})
