"""Data models shared by the generator, the store and the commands."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

E = TypeVar("E", bound="ChoiceEnum")


def _normalize(value: Any) -> str:
    return re.sub(r"[\s\-]+", "_", str(value).strip().lower())


class ChoiceEnum(str, Enum):
    """String enum that accepts loose user spellings."""

    @classmethod
    def parse(cls: Type[E], value: Any) -> E:
        if isinstance(value, cls):
            return value
        # constants imports this module, so the label tables are looked up late
        from zg_cli.core.constants import CHOICE_LABELS

        key = _normalize(value)
        labels = CHOICE_LABELS.get(cls, {})
        for member in cls:
            if key in (member.value, member.name.lower()) or key == _normalize(labels.get(member, "")):
                return member
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__} '{value}'. Expected one of: {choices}")

    @classmethod
    def parse_many(cls: Type[E], values: Optional[Iterable[Any]]) -> List[E]:
        parsed: List[E] = []
        for value in values or []:
            member = cls.parse(value)
            if member not in parsed:
                parsed.append(member)
        return parsed


class MuscleGroup(ChoiceEnum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABDOMEN = "abdomen"


class BodyArea(ChoiceEnum):
    LOWER_BACK = "lower_back"
    KNEE = "knee"
    SHOULDER = "shoulder"
    NECK = "neck"


class WorkoutSplit(ChoiceEnum):
    UPPER = "upper"
    LOWER = "lower"
    FULL = "full"


class Equipment(ChoiceEnum):
    MACHINE = "machine"
    CABLE = "cable"
    FREE_WEIGHT = "free_weight"
    BODYWEIGHT = "bodyweight"
    BENCH = "bench"


class Effort(ChoiceEnum):
    LIGHT = "light"
    IDEAL = "ideal"
    TOO_HEAVY = "too_heavy"


def _pick(record: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


@dataclass(frozen=True, eq=False)
class Exercise:
    """Catalog exercise. Identity is the id alone."""

    id: str
    name: str
    muscle_group: MuscleGroup
    equipment: Equipment
    sets: int
    reps: str
    rest_seconds: int
    duration_minutes: int
    contraindications: Tuple[BodyArea, ...] = ()
    checklist: Tuple[str, ...] = ()
    danger_alert: str = ""
    instructions: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Exercise):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Exercise":
        """Build an exercise from a catalog record (camelCase or snake_case keys)."""
        if not isinstance(record, dict):
            raise ValueError(f"Exercise record must be an object, got {type(record).__name__}")
        exercise_id = str(record.get("id") or "").strip()
        if not exercise_id:
            raise ValueError("Exercise record is missing 'id'")
        try:
            exercise = cls(
                id=exercise_id,
                name=str(record.get("name") or exercise_id),
                muscle_group=MuscleGroup.parse(_pick(record, "muscleGroup", "muscle_group")),
                equipment=Equipment.parse(_pick(record, "equipment", default="bodyweight")),
                sets=int(_pick(record, "sets", default=3)),
                reps=str(_pick(record, "reps", default="")),
                rest_seconds=int(_pick(record, "restSeconds", "rest_seconds", default=60)),
                duration_minutes=int(_pick(record, "durationMinutes", "duration_minutes")),
                contraindications=tuple(BodyArea.parse_many(record.get("contraindications"))),
                checklist=tuple(str(item) for item in record.get("checklist") or []),
                danger_alert=str(_pick(record, "dangerAlert", "danger_alert", default="")),
                instructions=str(record.get("instructions") or ""),
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid exercise '{exercise_id}': {exc}") from exc
        if exercise.duration_minutes < 1:
            raise ValueError(f"Invalid exercise '{exercise_id}': durationMinutes must be at least 1")
        return exercise

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "muscleGroup": self.muscle_group.value,
            "equipment": self.equipment.value,
            "sets": self.sets,
            "reps": self.reps,
            "restSeconds": self.rest_seconds,
            "durationMinutes": self.duration_minutes,
            "contraindications": [area.value for area in self.contraindications],
            "checklist": list(self.checklist),
            "dangerAlert": self.danger_alert,
            "instructions": self.instructions,
        }


@dataclass
class ExerciseLog:
    """Realised sets/reps/weight for one exercise of a session."""

    exercise_id: str
    exercise_name: str
    muscle_group: MuscleGroup
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    effort: Optional[Effort] = None
    completed_at: datetime = field(default_factory=datetime.now)

    @property
    def total_volume(self) -> float:
        return float(self.sets) * float(self.reps) * self.weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "muscle_group": self.muscle_group.value,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "effort": self.effort.value if self.effort else None,
            "completed_at": self.completed_at.isoformat(timespec="seconds"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExerciseLog":
        completed = data.get("completed_at")
        return cls(
            exercise_id=str(data["exercise_id"]),
            exercise_name=str(data.get("exercise_name") or data["exercise_id"]),
            muscle_group=MuscleGroup.parse(data["muscle_group"]),
            sets=int(data.get("sets") or 0),
            reps=int(data.get("reps") or 0),
            weight=float(data.get("weight") or 0.0),
            effort=Effort.parse(data["effort"]) if data.get("effort") else None,
            completed_at=datetime.fromisoformat(completed) if completed else datetime.now(),
        )


@dataclass
class WorkoutSession:
    """A completed workout and its exercise logs."""

    id: str
    date: datetime
    duration_minutes: int
    split: Optional[WorkoutSplit] = None
    notes: str = ""
    logs: List[ExerciseLog] = field(default_factory=list)

    @property
    def total_volume(self) -> float:
        return sum(log.total_volume for log in self.logs)

    @property
    def exercise_count(self) -> int:
        return len(self.logs)

    def estimated_calories(self, calories_per_minute: float = 5.0) -> int:
        return int(self.duration_minutes * calories_per_minute)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(timespec="seconds"),
            "duration_minutes": self.duration_minutes,
            "split": self.split.value if self.split else None,
            "notes": self.notes,
            "logs": [log.to_dict() for log in self.logs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutSession":
        return cls(
            id=str(data["id"]),
            date=datetime.fromisoformat(str(data["date"])),
            duration_minutes=int(data.get("duration_minutes") or 0),
            split=WorkoutSplit.parse(data["split"]) if data.get("split") else None,
            notes=str(data.get("notes") or ""),
            logs=[ExerciseLog.from_dict(item) for item in data.get("logs") or []],
        )


@dataclass
class UserProfile:
    """Onboarding data: display name and self-reported restrictions."""

    name: str = ""
    restrictions: List[BodyArea] = field(default_factory=list)
    onboarding_complete: bool = False
    created_at: Optional[str] = None

    def has_restriction(self, area: BodyArea) -> bool:
        return area in self.restrictions

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "UserProfile":
        section = config.get("profile", {})
        return cls(
            name=str(section.get("name") or ""),
            restrictions=BodyArea.parse_many(section.get("restrictions")),
            onboarding_complete=bool(section.get("onboarding_complete", False)),
            created_at=section.get("created_at") or None,
        )

    def to_config(self) -> Dict[str, Any]:
        section: Dict[str, Any] = {
            "name": self.name,
            "restrictions": [area.value for area in self.restrictions],
            "onboarding_complete": self.onboarding_complete,
        }
        if self.created_at:
            section["created_at"] = self.created_at
        return section
