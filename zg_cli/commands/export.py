"""Export recorded sessions to external formats."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Optional

import typer

from zg_cli.commands.common import get_state, open_store, print_json_payload
from zg_cli.core.config import calories_per_minute, resolve_output_dir
from zg_cli.core.history import filter_sessions
from zg_cli.core.models import WorkoutSession
from zg_cli.core.store import StoreError
from zg_cli.exporters.json_export import write_health_export
from zg_cli.exporters.markdown import generate_index, write_session_markdown
from zg_cli.utils.date_ranges import resolve_date_range, validate_date


def _ics_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,").replace("\n", "\\n")


def _write_csv(path: Path, sessions: List[WorkoutSession]) -> int:
    """One row per exercise log; returns the number of rows."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fields = [
        "session_id",
        "date",
        "split",
        "duration_minutes",
        "exercise_id",
        "exercise_name",
        "muscle_group",
        "sets",
        "reps",
        "weight",
        "volume",
        "effort",
    ]
    rows = 0
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fields)
        writer.writeheader()
        for session in sessions:
            for log in session.logs:
                writer.writerow(
                    {
                        "session_id": session.id,
                        "date": session.date.strftime("%Y-%m-%d"),
                        "split": session.split.value if session.split else "",
                        "duration_minutes": session.duration_minutes,
                        "exercise_id": log.exercise_id,
                        "exercise_name": log.exercise_name,
                        "muscle_group": log.muscle_group.value,
                        "sets": log.sets,
                        "reps": log.reps,
                        "weight": log.weight,
                        "volume": log.total_volume,
                        "effort": log.effort.value if log.effort else "",
                    }
                )
                rows += 1
    return rows


def _write_ical(path: Path, sessions: List[WorkoutSession]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//zengym-cli//EN"]
    for session in sessions:
        start = session.date.strftime("%Y%m%dT%H%M%S")
        split_name = session.split.value if session.split else "session"
        exercises = ", ".join(log.exercise_name for log in session.logs)
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:{session.id}@zengym-cli",
                f"DTSTART:{start}",
                f"DURATION:PT{session.duration_minutes}M",
                f"SUMMARY:{_ics_escape(f'Zengym {split_name} workout')}",
                f"DESCRIPTION:{_ics_escape(exercises)}",
                "END:VEVENT",
            ]
        )
    lines.append("END:VCALENDAR")
    path.write_text("\n".join(lines) + "\n")


def export_command(
    ctx: typer.Context,
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Export last N days"),
    last_weeks: Optional[int] = typer.Option(None, help="Export last N weeks"),
    this_month: bool = typer.Option(False, help="Export this month"),
    output_format: str = typer.Option("csv", "--format", help="Export format: csv|ical|markdown|health"),
    output_dir: Optional[Path] = typer.Option(None, help="Output directory"),
    output_file: Optional[Path] = typer.Option(None, help="Single output file (csv/ical/health)"),
    rewrite: bool = typer.Option(False, help="Rewrite existing markdown files"),
) -> None:
    """Export recorded sessions as CSV, iCal, markdown or health-store JSON."""
    state = get_state(ctx)

    if output_format not in {"csv", "ical", "markdown", "health"}:
        raise typer.BadParameter("--format must be csv|ical|markdown|health")

    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        last_weeks=last_weeks,
        this_month=this_month,
    )
    try:
        sessions = filter_sessions(open_store(state).sessions, start=start, end=end)
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=2)

    out_dir = resolve_output_dir(state.config, explicit=output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    rate = calories_per_minute(state.config)

    result: Dict[str, object]
    if output_format == "csv":
        path = output_file or (out_dir / "sessions.csv")
        rows = _write_csv(path, sessions)
        result = {"status": "exported", "format": "csv", "path": str(path), "count": len(sessions), "rows": rows}
    elif output_format == "ical":
        path = output_file or (out_dir / "zengym.ics")
        _write_ical(path, sessions)
        result = {"status": "exported", "format": "ical", "path": str(path), "count": len(sessions)}
    elif output_format == "health":
        path = output_file or (out_dir / "health_workouts.json")
        write_health_export(path, sessions, calories_per_minute=rate)
        result = {"status": "exported", "format": "health", "path": str(path), "count": len(sessions)}
    else:
        md_dir = out_dir / "sessions"
        for session in sessions:
            write_session_markdown(md_dir, session, rate, rewrite=rewrite)
        generate_index(md_dir, sessions)
        result = {"status": "exported", "format": "markdown", "path": str(md_dir), "count": len(sessions)}

    state.debug(f"Exported {len(sessions)} sessions between {start} and {end}")

    if state.json_output:
        print_json_payload(state, result)
        return

    if state.plain_output:
        for key in ("status", "format", "path", "count"):
            typer.echo(f"{key}\t{result[key]}")
        return

    state.console.print(
        f"Exported {result['count']} sessions as {result['format']} to {result['path']}"
    )
