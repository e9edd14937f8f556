"""Exercise catalog commands."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.table import Table

from zg_cli.commands.common import (
    get_state,
    load_catalog_for_state,
    parse_choice,
    parse_choices,
    print_json_payload,
)
from zg_cli.core.catalog import find_exercise
from zg_cli.core.constants import SPLIT_MUSCLE_GROUPS
from zg_cli.core.generator import safe_exercises
from zg_cli.core.models import BodyArea, MuscleGroup, WorkoutSplit
from zg_cli.exporters.markdown import exercise_to_markdown
from zg_cli.utils.formatting import equipment_label, format_areas, muscle_label
from zg_cli.utils.text import first_sentence

app = typer.Typer(help="Browse the exercise catalog")


@app.command("list")
def list_command(
    ctx: typer.Context,
    muscle: Optional[str] = typer.Option(None, help="Only this muscle group"),
    split: Optional[str] = typer.Option(None, help="Only groups trained by this split"),
    restrict: Optional[List[str]] = typer.Option(None, "--restrict", "-r", help="Hide exercises unsafe for this area"),
) -> None:
    """List catalog exercises with optional filters."""
    state = get_state(ctx)
    exercises = load_catalog_for_state(state)

    if restrict:
        exercises = safe_exercises(exercises, parse_choices(BodyArea, restrict, "--restrict"))
    if muscle:
        group = parse_choice(MuscleGroup, muscle, "--muscle")
        exercises = [exercise for exercise in exercises if exercise.muscle_group == group]
    if split:
        groups = SPLIT_MUSCLE_GROUPS[parse_choice(WorkoutSplit, split, "--split")]
        exercises = [exercise for exercise in exercises if exercise.muscle_group in groups]

    if state.json_output:
        print_json_payload(state, {"count": len(exercises), "exercises": [item.to_dict() for item in exercises]})
        return

    if state.plain_output:
        typer.echo("id\tname\tmuscle_group\tequipment\tminutes\tcontraindications")
        for exercise in exercises:
            typer.echo(
                "\t".join(
                    [
                        exercise.id,
                        exercise.name,
                        exercise.muscle_group.value,
                        exercise.equipment.value,
                        str(exercise.duration_minutes),
                        ",".join(area.value for area in exercise.contraindications) or "-",
                    ]
                )
            )
        typer.echo(f"total\t{len(exercises)}")
        return

    table = Table(title=f"Exercises ({len(exercises)} total)")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Group")
    table.add_column("Equipment")
    table.add_column("Min", justify="right")
    table.add_column("Avoid with")
    for exercise in exercises:
        table.add_row(
            exercise.id,
            exercise.name,
            muscle_label(exercise.muscle_group),
            equipment_label(exercise.equipment),
            str(exercise.duration_minutes),
            format_areas(exercise.contraindications),
        )
    state.console.print(table)


@app.command("show")
def show_command(
    ctx: typer.Context,
    exercise_id: str = typer.Argument(..., help="Exercise id"),
) -> None:
    """Show the full card for one exercise."""
    state = get_state(ctx)
    exercise = find_exercise(load_catalog_for_state(state), exercise_id)
    if exercise is None:
        typer.echo(f"Exercise not found: {exercise_id}")
        raise typer.Exit(code=1)

    if state.json_output:
        print_json_payload(state, exercise.to_dict())
        return

    if state.plain_output:
        typer.echo(f"id\t{exercise.id}")
        typer.echo(f"name\t{exercise.name}")
        typer.echo(f"muscle_group\t{exercise.muscle_group.value}")
        typer.echo(f"prescription\t{exercise.sets}x{exercise.reps}")
        typer.echo(f"summary\t{first_sentence(exercise.instructions)}")
        return

    state.console.print(exercise_to_markdown(exercise))
