"""Local JSON store for the current plan and completed sessions."""

from __future__ import annotations

import json
import os
import re
import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from zg_cli.core.catalog import catalog_by_id
from zg_cli.core.models import Effort, Exercise, ExerciseLog, WorkoutSession, WorkoutSplit


class StoreError(RuntimeError):
    """Raised when the local store cannot be read or written."""


def new_session_id() -> str:
    return uuid.uuid4().hex[:8]


def prescribed_reps(reps_text: str) -> int:
    """Lower bound of a free-form reps prescription ("10-12" -> 10)."""
    match = re.search(r"\d+", reps_text or "")
    return int(match.group(0)) if match else 0


def logs_from_plan(
    plan: Sequence[Exercise],
    entries: Dict[str, Dict[str, Any]],
    catalog: Sequence[Exercise] = (),
) -> List[ExerciseLog]:
    """Turn a plan plus realised entries into exercise logs.

    Plan exercises without an entry are logged with the prescription and no
    weight. Entries for exercises outside the plan are resolved against the
    catalog and appended after the plan.
    """
    by_id = catalog_by_id(catalog)
    logs: List[ExerciseLog] = []
    seen: set[str] = set()

    def _log(exercise: Exercise, entry: Optional[Dict[str, Any]]) -> ExerciseLog:
        entry = entry or {}
        effort = entry.get("effort")
        return ExerciseLog(
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            muscle_group=exercise.muscle_group,
            sets=int(entry.get("sets", exercise.sets)),
            reps=int(entry.get("reps", prescribed_reps(exercise.reps))),
            weight=float(entry.get("weight", 0.0)),
            effort=Effort.parse(effort) if effort else None,
        )

    for exercise in plan:
        logs.append(_log(exercise, entries.get(exercise.id)))
        seen.add(exercise.id)

    for exercise_id, entry in entries.items():
        if exercise_id in seen:
            continue
        exercise = by_id.get(exercise_id)
        if exercise is None:
            raise ValueError(f"Unknown exercise id: {exercise_id}")
        logs.append(_log(exercise, entry))
        seen.add(exercise_id)

    return logs


class LocalStore:
    """Single-file JSON store: last split, current plan and session history."""

    def __init__(self, path: Path, data: Optional[Dict[str, Any]] = None) -> None:
        self.path = path
        self.data: Dict[str, Any] = data or {}
        self.data.setdefault("last_split", None)
        self.data.setdefault("current_plan", None)
        self.data.setdefault("sessions", [])

    @classmethod
    def load(cls, path: Path) -> "LocalStore":
        if not path.exists():
            return cls(path)
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read store {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise StoreError(f"Store {path} must contain a JSON object")
        store = cls(path, loaded)
        store._validate_splits()
        return store

    def _validate_splits(self) -> None:
        plan = self.data.get("current_plan")
        if plan is not None and not isinstance(plan, dict):
            raise StoreError(f"Malformed current plan in store {self.path}")
        raw_values = [("last_split", self.data.get("last_split"))]
        if plan:
            raw_values.append(("current_plan.split", plan.get("split")))
        for key, raw in raw_values:
            if not raw:
                continue
            try:
                WorkoutSplit.parse(raw)
            except ValueError as exc:
                raise StoreError(f"Invalid {key} in store {self.path}: {exc}") from exc

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".zengym-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(self.data, indent=2) + "\n")
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Cannot write store {self.path}: {exc}") from exc
        return self.path

    @property
    def last_split(self) -> Optional[WorkoutSplit]:
        raw = self.data.get("last_split")
        return WorkoutSplit.parse(raw) if raw else None

    @last_split.setter
    def last_split(self, split: Optional[WorkoutSplit]) -> None:
        self.data["last_split"] = split.value if split else None

    def set_current_plan(self, plan: Sequence[Exercise], split: WorkoutSplit, duration: int) -> None:
        self.data["current_plan"] = {
            "created_at": datetime.now().isoformat(timespec="seconds"),
            "split": split.value,
            "duration": duration,
            "exercise_ids": [exercise.id for exercise in plan],
        }

    def current_plan_info(self) -> Optional[Dict[str, Any]]:
        plan = self.data.get("current_plan")
        return plan if isinstance(plan, dict) else None

    def current_plan_ids(self) -> List[str]:
        info = self.current_plan_info()
        return list(info.get("exercise_ids", [])) if info else []

    def current_plan(self, catalog: Sequence[Exercise]) -> List[Exercise]:
        """Resolve the stored plan against the catalog, skipping unknown ids."""
        by_id = catalog_by_id(catalog)
        return [by_id[item] for item in self.current_plan_ids() if item in by_id]

    def clear_current_plan(self) -> None:
        self.data["current_plan"] = None

    @property
    def sessions(self) -> List[WorkoutSession]:
        try:
            parsed = [WorkoutSession.from_dict(item) for item in self.data.get("sessions", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Malformed session in store {self.path}: {exc}") from exc
        parsed.sort(key=lambda session: session.date, reverse=True)
        return parsed

    def record_session(self, session: WorkoutSession, clear_plan: bool = True) -> None:
        self.data["sessions"].append(session.to_dict())
        if session.split is not None:
            self.last_split = session.split
        if clear_plan:
            self.clear_current_plan()

    def get_session(self, session_id: str = "latest") -> Optional[WorkoutSession]:
        """Find a session by id, unique id prefix, or ``latest``."""
        sessions = self.sessions
        if not sessions:
            return None
        if session_id == "latest":
            return sessions[0]
        matches = [session for session in sessions if session.id.startswith(session_id)]
        if len(matches) > 1:
            raise StoreError(f"Session id prefix '{session_id}' is ambiguous")
        return matches[0] if matches else None
