"""Session logging, history and summary commands."""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml
from rich.table import Table

from zg_cli.commands.common import (
    get_state,
    load_catalog_for_state,
    open_store,
    parse_choice,
    print_json_payload,
    save_store,
)
from zg_cli.core.catalog import catalog_by_id
from zg_cli.core.config import calories_per_minute
from zg_cli.core.history import filter_sessions, session_summary, weekly_summary
from zg_cli.core.models import WorkoutSession, WorkoutSplit
from zg_cli.core.store import LocalStore, StoreError, logs_from_plan, new_session_id
from zg_cli.exporters.markdown import session_to_markdown
from zg_cli.utils.date_ranges import parse_date, resolve_date_range, validate_date
from zg_cli.utils.formatting import (
    effort_label,
    format_minutes,
    format_volume,
    format_weight,
    muscle_label,
    split_label,
)
from zg_cli.utils.parsing import entries_from_records, load_session_input, parse_entries


def log_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="JSON/YAML file describing the session"),
    stdin: bool = typer.Option(False, "--stdin", help="Read the session from stdin"),
    entry: Optional[List[str]] = typer.Option(
        None,
        "--entry",
        "-e",
        help="Realised work as ID:SETSxREPS[@WEIGHT][:effort] (repeatable)",
    ),
    duration: Optional[int] = typer.Option(None, help="Actual duration in minutes"),
    split: Optional[str] = typer.Option(None, help="Split trained: upper|lower|full"),
    notes: str = typer.Option("", help="Free-form notes"),
    day: Optional[str] = typer.Option(None, "--date", help="Session date YYYY-MM-DD (default: now)", callback=validate_date),
    dry_run: bool = typer.Option(False, help="Show the session without saving it"),
) -> None:
    """Record a completed workout from the current plan or a session file."""
    state = get_state(ctx)
    store = open_store(state)
    catalog = load_catalog_for_state(state)

    stdin_text = sys.stdin.read() if stdin else ""
    try:
        data = load_session_input(file_path=file, read_stdin=stdin, stdin_text=stdin_text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Cannot read session input: {exc}")

    from_input = data is not None
    plan_info = store.current_plan_info() if not from_input else None
    plan = store.current_plan(catalog) if plan_info else []

    try:
        entries = entries_from_records(data.get("exercises")) if data else {}
        entries.update(parse_entries(entry))
        logs = logs_from_plan(plan, entries, catalog)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    if not logs:
        raise typer.BadParameter("Nothing to log: generate a plan first or pass --file/--stdin/--entry")

    data = data or {}
    raw_split = split or data.get("split") or (plan_info or {}).get("split")
    session_split = parse_choice(WorkoutSplit, raw_split, "--split") if raw_split else None

    by_id = catalog_by_id(catalog)
    minutes = duration
    if minutes is None:
        minutes = data.get("duration") or (plan_info or {}).get("duration")
    if minutes is None:
        minutes = sum(by_id[log.exercise_id].duration_minutes for log in logs if log.exercise_id in by_id)
    try:
        minutes = int(minutes)
    except (TypeError, ValueError):
        raise typer.BadParameter(f"Invalid session duration '{minutes}': expected whole minutes")
    if minutes < 0:
        raise typer.BadParameter("Session duration must not be negative")

    raw_date = day or data.get("date")
    session_date = datetime.now().replace(microsecond=0)
    if raw_date:
        try:
            session_date = datetime.combine(parse_date(str(raw_date)[:10]), session_date.time())
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid session date '{raw_date}': {exc}")

    session = WorkoutSession(
        id=new_session_id(),
        date=session_date,
        duration_minutes=minutes,
        split=session_split,
        notes=notes or str(data.get("notes") or ""),
        logs=logs,
    )

    rate = calories_per_minute(state.config)
    summary = session_summary(session, calories_per_minute=rate)
    if not dry_run:
        store.record_session(session, clear_plan=not from_input)
        save_store(store)
        state.debug(f"Recorded session {session.id} in {store.path}")

    payload = {"status": "dry-run" if dry_run else "recorded", "session": summary}
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"status\t{payload['status']}")
        typer.echo(f"session_id\t{session.id}")
        typer.echo(f"exercises\t{session.exercise_count}")
        typer.echo(f"volume\t{session.total_volume:.1f}")
        typer.echo(f"calories\t{summary['estimated_calories']}")
        return

    verb = "Previewed" if dry_run else "Recorded"
    state.console.print(
        f"{verb} session {session.id}: {session.exercise_count} exercises, "
        f"{format_minutes(session.duration_minutes)}, {format_volume(session.total_volume)}, "
        f"~{summary['estimated_calories']} kcal"
    )


def history_command(
    ctx: typer.Context,
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Last N days"),
    last_weeks: Optional[int] = typer.Option(None, help="Last N weeks"),
    this_week: bool = typer.Option(False, help="This week"),
    this_month: bool = typer.Option(False, help="This month"),
    limit: int = typer.Option(30, help="Maximum sessions to display"),
) -> None:
    """List recorded sessions, newest first, with this week's totals."""
    state = get_state(ctx)
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        last_weeks=last_weeks,
        this_week=this_week,
        this_month=this_month,
    )
    store = open_store(state)
    try:
        all_sessions = store.sessions
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=2)

    sessions = filter_sessions(all_sessions, start=start, end=end)
    week = weekly_summary(all_sessions)

    if state.json_output:
        print_json_payload(
            state,
            {
                "date_range": {"start": start.isoformat(), "end": end.isoformat()},
                "week": week,
                "sessions": [session.to_dict() for session in sessions],
            },
        )
        return

    if state.plain_output:
        typer.echo("id\tdate\tsplit\tminutes\texercises\tvolume")
        for session in sessions[:limit]:
            typer.echo(
                "\t".join(
                    [
                        session.id,
                        session.date.strftime("%Y-%m-%d"),
                        session.split.value if session.split else "-",
                        str(session.duration_minutes),
                        str(session.exercise_count),
                        f"{session.total_volume:.1f}",
                    ]
                )
            )
        typer.echo(f"total\t{len(sessions)}")
        typer.echo(f"week_sessions\t{week['sessions']}")
        return

    state.console.print(
        f"This week: {week['sessions']} workouts, {format_minutes(week['minutes'])}, {format_volume(week['volume'])}"
    )
    table = Table(title=f"Sessions ({len(sessions)} total)")
    table.add_column("Id")
    table.add_column("Date")
    table.add_column("Split")
    table.add_column("Duration")
    table.add_column("Exercises", justify="right")
    table.add_column("Volume", justify="right")
    for session in sessions[:limit]:
        table.add_row(
            session.id,
            session.date.strftime("%Y-%m-%d"),
            split_label(session.split),
            format_minutes(session.duration_minutes),
            str(session.exercise_count),
            format_volume(session.total_volume),
        )
    state.console.print(table)


def _find_session(store: LocalStore, session_id: str) -> WorkoutSession:
    try:
        session = store.get_session(session_id)
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=2)
    if session is None:
        typer.echo(f"Session not found: {session_id}")
        raise typer.Exit(code=1)
    return session


def summary_command(
    ctx: typer.Context,
    session_id: str = typer.Argument("latest", help="Session id, id prefix, or 'latest'"),
    output_format: str = typer.Option("table", "--format", help="Output format: table|markdown"),
) -> None:
    """Summarise one session: duration, volume and estimated calories."""
    state = get_state(ctx)
    if output_format not in {"table", "markdown"}:
        raise typer.BadParameter("--format must be one of: table, markdown")

    session = _find_session(open_store(state), session_id)
    rate = calories_per_minute(state.config)
    summary: Dict[str, Any] = session_summary(session, calories_per_minute=rate)

    if state.json_output:
        print_json_payload(state, summary)
        return

    if state.plain_output:
        for key in ("id", "date", "split", "duration_minutes", "exercise_count", "total_volume", "estimated_calories"):
            typer.echo(f"{key}\t{summary[key]}")
        typer.echo(f"volume_by_muscle_group\t{json.dumps(summary['volume_by_muscle_group'], separators=(',', ':'))}")
        return

    if output_format == "markdown":
        state.console.print(session_to_markdown(session, rate))
        return

    state.console.print(
        f"{session.date.strftime('%Y-%m-%d')} {split_label(session.split)}: "
        f"{format_minutes(session.duration_minutes)}, {session.exercise_count} exercises, "
        f"{format_volume(session.total_volume)}, ~{summary['estimated_calories']} kcal"
    )
    table = Table(title=f"Session {session.id}")
    table.add_column("Exercise")
    table.add_column("Group")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("Effort")
    for log in session.logs:
        table.add_row(
            log.exercise_name,
            muscle_label(log.muscle_group),
            str(log.sets),
            str(log.reps),
            format_weight(log.weight),
            format_volume(log.total_volume),
            effort_label(log.effort),
        )
    state.console.print(table)
    if session.notes:
        state.console.print(f"Notes: {session.notes}")
