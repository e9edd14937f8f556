"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from typing import Iterable, Optional

from zg_cli.core.constants import (
    BODY_AREA_LABELS,
    EFFORT_LABELS,
    EQUIPMENT_LABELS,
    MUSCLE_GROUP_LABELS,
    SPLIT_LABELS,
)
from zg_cli.core.models import BodyArea, Effort, Equipment, MuscleGroup, WorkoutSplit


def format_minutes(minutes: Optional[int]) -> str:
    """Format whole minutes as ``45 min`` or ``1h05``."""
    if not minutes:
        return "0 min"
    hours, rest = divmod(int(minutes), 60)
    if hours:
        return f"{hours}h{rest:02d}"
    return f"{rest} min"


def format_volume(volume: Optional[float]) -> str:
    if not volume:
        return "0 kg"
    return f"{float(volume):,.0f} kg"


def format_weight(weight: Optional[float]) -> str:
    if not weight:
        return "-"
    value = float(weight)
    return f"{value:.0f} kg" if value.is_integer() else f"{value:.1f} kg"


def format_rest(seconds: int) -> str:
    if seconds >= 60 and seconds % 60 == 0:
        return f"{seconds // 60} min"
    return f"{seconds}s"


def muscle_label(group: MuscleGroup) -> str:
    return MUSCLE_GROUP_LABELS.get(group, group.value)


def split_label(split: Optional[WorkoutSplit]) -> str:
    if split is None:
        return "-"
    return SPLIT_LABELS.get(split, split.value)


def equipment_label(equipment: Equipment) -> str:
    return EQUIPMENT_LABELS.get(equipment, equipment.value)


def effort_label(effort: Optional[Effort]) -> str:
    if effort is None:
        return "-"
    return EFFORT_LABELS.get(effort, effort.value)


def format_areas(areas: Iterable[BodyArea]) -> str:
    """Comma-separated body-area labels, or ``none``."""
    labels = [BODY_AREA_LABELS.get(area, area.value) for area in areas]
    return ", ".join(labels) if labels else "none"
