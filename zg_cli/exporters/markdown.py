"""Markdown rendering for plans and sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from zg_cli.core.generator import plan_duration
from zg_cli.core.models import Exercise, WorkoutSession, WorkoutSplit
from zg_cli.utils.formatting import (
    effort_label,
    equipment_label,
    format_areas,
    format_minutes,
    format_rest,
    format_volume,
    format_weight,
    muscle_label,
    split_label,
)
from zg_cli.utils.text import slugify


def plan_to_markdown(plan: Sequence[Exercise], split: WorkoutSplit, budget: int) -> str:
    """Render a generated workout as a markdown checklist."""
    lines = [
        f"# {split_label(split)} workout",
        "",
        f"- **Planned:** {format_minutes(plan_duration(plan))} of {format_minutes(budget)}",
        f"- **Exercises:** {len(plan)}",
        "",
    ]
    if not plan:
        lines.append("No exercises fit the current filters.")
        return "\n".join(lines) + "\n"

    for idx, exercise in enumerate(plan, 1):
        lines.append(
            f"{idx}. **{exercise.name}** ({muscle_label(exercise.muscle_group)}, "
            f"{equipment_label(exercise.equipment)}) {exercise.sets}x{exercise.reps}, "
            f"rest {format_rest(exercise.rest_seconds)}, ~{exercise.duration_minutes} min"
        )
        if exercise.danger_alert:
            lines.append(f"   - Warning: {exercise.danger_alert}")
    return "\n".join(lines) + "\n"


def exercise_to_markdown(exercise: Exercise) -> str:
    checklist = "\n".join(f"- [ ] {item}" for item in exercise.checklist) or "- (none)"
    return (
        f"# {exercise.name}\n\n"
        f"- **Id:** {exercise.id}\n"
        f"- **Muscle group:** {muscle_label(exercise.muscle_group)}\n"
        f"- **Equipment:** {equipment_label(exercise.equipment)}\n"
        f"- **Prescription:** {exercise.sets} x {exercise.reps}, rest {format_rest(exercise.rest_seconds)}\n"
        f"- **Duration:** ~{exercise.duration_minutes} min\n"
        f"- **Avoid with:** {format_areas(exercise.contraindications)}\n\n"
        f"## Checklist\n{checklist}\n\n"
        f"## Danger\n{exercise.danger_alert or 'None'}\n\n"
        f"## Instructions\n{exercise.instructions or 'No instructions'}\n"
    )


def session_to_markdown(session: WorkoutSession, calories_per_minute: float) -> str:
    """Convert a session to markdown with frontmatter."""
    day = session.date.strftime("%Y-%m-%d")
    split_value = session.split.value if session.split else "none"
    calories = session.estimated_calories(calories_per_minute)

    rows: List[str] = [
        "| Exercise | Group | Sets | Reps | Weight | Volume | Effort |",
        "|----------|-------|------|------|--------|--------|--------|",
    ]
    for log in session.logs:
        rows.append(
            f"| {log.exercise_name} | {muscle_label(log.muscle_group)} | {log.sets} | {log.reps} | "
            f"{format_weight(log.weight)} | {format_volume(log.total_volume)} | {effort_label(log.effort)} |"
        )

    return (
        f"---\n"
        f"id: \"{session.id}\"\n"
        f"date: \"{day}\"\n"
        f"split: \"{split_value}\"\n"
        f"duration_minutes: {session.duration_minutes}\n"
        f"total_volume: {session.total_volume:.1f}\n"
        f"estimated_calories: {calories}\n"
        f"---\n\n"
        f"# Workout {day}\n\n"
        f"- **Split:** {split_label(session.split)}\n"
        f"- **Duration:** {format_minutes(session.duration_minutes)}\n"
        f"- **Exercises:** {session.exercise_count}\n"
        f"- **Volume:** {format_volume(session.total_volume)}\n"
        f"- **Calories:** ~{calories} kcal\n\n"
        f"## Exercises\n"
        + ("\n".join(rows) if session.logs else "No exercises logged")
        + "\n\n"
        f"## Notes\n"
        f"{session.notes or 'No notes'}\n"
    )


def session_filename(session: WorkoutSession) -> str:
    day = session.date.strftime("%Y-%m-%d")
    return f"{day}-{slugify(session.split.value if session.split else 'session')}-{session.id}.md"


def write_session_markdown(
    output_dir: Path,
    session: WorkoutSession,
    calories_per_minute: float,
    rewrite: bool = False,
) -> Path:
    """Write one session markdown file and return output path."""
    out_path = output_dir / session_filename(session)
    if out_path.exists() and not rewrite:
        return out_path
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(session_to_markdown(session, calories_per_minute))
    return out_path


def generate_index(output_dir: Path, sessions: Iterable[WorkoutSession]) -> Path:
    """Write INDEX.md linking every exported session, newest first."""
    items = sorted(sessions, key=lambda session: session.date, reverse=True)
    lines = [
        "# Workout History",
        "",
        f"_{len(items)} sessions_",
        "",
        "| Date | Split | Duration | Exercises | Volume |",
        "|------|-------|----------|-----------|--------|",
    ]
    for session in items:
        link = f"[{session.date.strftime('%Y-%m-%d')}]({session_filename(session)})"
        lines.append(
            f"| {link} | {split_label(session.split)} | {format_minutes(session.duration_minutes)} | "
            f"{session.exercise_count} | {format_volume(session.total_volume)} |"
        )
    lines.append("")
    path = output_dir / "INDEX.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines))
    return path
