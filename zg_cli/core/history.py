"""Session history aggregation and summaries."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from zg_cli.core.constants import (
    DEFAULT_CALORIES_PER_MINUTE,
    HEALTH_ACTIVITY_TYPE,
    HEALTH_BRAND_NAME,
)
from zg_cli.core.models import WorkoutSession


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def filter_sessions(
    sessions: Iterable[WorkoutSession],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[WorkoutSession]:
    """Keep sessions whose date falls in [start, end]."""
    kept: List[WorkoutSession] = []
    for session in sessions:
        day = session.date.date()
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        kept.append(session)
    return kept


def weekly_summary(sessions: Iterable[WorkoutSession], today: Optional[date] = None) -> Dict[str, Any]:
    """Totals for the sessions since the start of the current week."""
    now = today or date.today()
    start = week_start(now)
    this_week = filter_sessions(sessions, start=start, end=now)
    return {
        "week_start": start.isoformat(),
        "sessions": len(this_week),
        "minutes": sum(session.duration_minutes for session in this_week),
        "volume": round(sum(session.total_volume for session in this_week), 1),
    }


def session_summary(
    session: WorkoutSession,
    calories_per_minute: float = DEFAULT_CALORIES_PER_MINUTE,
) -> Dict[str, Any]:
    volume_by_group: Dict[str, float] = defaultdict(float)
    for log in session.logs:
        volume_by_group[log.muscle_group.value] += log.total_volume

    return {
        "id": session.id,
        "date": session.date.isoformat(timespec="seconds"),
        "split": session.split.value if session.split else None,
        "duration_minutes": session.duration_minutes,
        "exercise_count": session.exercise_count,
        "total_volume": round(session.total_volume, 1),
        "estimated_calories": session.estimated_calories(calories_per_minute),
        "volume_by_muscle_group": {key: round(value, 1) for key, value in volume_by_group.items()},
        "notes": session.notes,
        "exercises": [log.to_dict() for log in session.logs],
    }


def profile_totals(sessions: Iterable[WorkoutSession]) -> Dict[str, Any]:
    items = list(sessions)
    return {
        "sessions": len(items),
        "minutes": sum(session.duration_minutes for session in items),
        "volume": round(sum(session.total_volume for session in items), 1),
    }


def health_samples(
    sessions: Iterable[WorkoutSession],
    calories_per_minute: float = DEFAULT_CALORIES_PER_MINUTE,
) -> List[Dict[str, Any]]:
    """Workout records in the shape a health-store bridge consumes."""
    samples: List[Dict[str, Any]] = []
    for session in sessions:
        end: datetime = session.date
        start = end - timedelta(minutes=session.duration_minutes)
        samples.append(
            {
                "session_id": session.id,
                "activity_type": HEALTH_ACTIVITY_TYPE,
                "start": start.isoformat(timespec="seconds"),
                "end": end.isoformat(timespec="seconds"),
                "duration_seconds": session.duration_minutes * 60,
                "energy_kcal": session.estimated_calories(calories_per_minute),
                "metadata": {"brand_name": HEALTH_BRAND_NAME},
            }
        )
    return samples
