"""Workout generation, swap and split commands."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Sequence

import typer
from rich.table import Table

from zg_cli.commands.common import (
    get_state,
    load_catalog_for_state,
    open_store,
    parse_choice,
    print_json_payload,
    resolve_restrictions,
    save_store,
)
from zg_cli.core.catalog import find_exercise
from zg_cli.core.constants import DEFAULT_DURATION_MINUTES
from zg_cli.core.generator import (
    generate_workout,
    plan_duration,
    recommended_split,
    replace_in_plan,
    swap_exercise,
)
from zg_cli.core.models import BodyArea, Exercise, WorkoutSplit
from zg_cli.core.state import CLIState
from zg_cli.exporters.markdown import plan_to_markdown
from zg_cli.utils.formatting import (
    equipment_label,
    format_areas,
    format_minutes,
    format_rest,
    muscle_label,
    split_label,
)


def _rng(seed: Optional[int]) -> Optional[random.Random]:
    return random.Random(seed) if seed is not None else None


def _plan_payload(
    plan: Sequence[Exercise],
    split: WorkoutSplit,
    budget: int,
    restrictions: Sequence[BodyArea],
) -> Dict[str, Any]:
    return {
        "split": split.value,
        "duration_budget": budget,
        "planned_minutes": plan_duration(plan),
        "restrictions": [area.value for area in restrictions],
        "exercises": [exercise.to_dict() for exercise in plan],
    }


def render_plan(
    state: CLIState,
    plan: Sequence[Exercise],
    split: WorkoutSplit,
    budget: int,
    restrictions: Sequence[BodyArea],
    output_format: str = "table",
) -> None:
    """Print a plan as JSON, tab-separated lines, markdown or a rich table."""
    if state.json_output:
        print_json_payload(state, _plan_payload(plan, split, budget, restrictions))
        return

    if state.plain_output:
        typer.echo("id\tname\tmuscle_group\tsets\treps\trest\tminutes")
        for exercise in plan:
            typer.echo(
                "\t".join(
                    [
                        exercise.id,
                        exercise.name,
                        exercise.muscle_group.value,
                        str(exercise.sets),
                        exercise.reps,
                        str(exercise.rest_seconds),
                        str(exercise.duration_minutes),
                    ]
                )
            )
        typer.echo(f"split\t{split.value}")
        typer.echo(f"planned_minutes\t{plan_duration(plan)}")
        typer.echo(f"duration_budget\t{budget}")
        return

    if output_format == "markdown":
        state.console.print(plan_to_markdown(plan, split, budget))
        return

    table = Table(title=f"{split_label(split)} workout ({format_minutes(plan_duration(plan))} of {format_minutes(budget)})")
    table.add_column("#", justify="right")
    table.add_column("Exercise")
    table.add_column("Group")
    table.add_column("Equipment")
    table.add_column("Sets x Reps")
    table.add_column("Rest")
    table.add_column("Min", justify="right")
    table.add_column("Id")
    for idx, exercise in enumerate(plan, 1):
        table.add_row(
            str(idx),
            exercise.name,
            muscle_label(exercise.muscle_group),
            equipment_label(exercise.equipment),
            f"{exercise.sets} x {exercise.reps}",
            format_rest(exercise.rest_seconds),
            str(exercise.duration_minutes),
            exercise.id,
        )
    state.console.print(table)
    state.console.print(f"Restrictions: {format_areas(restrictions)}")
    if not plan:
        state.console.print("No exercises fit the current duration and restrictions.")


def generate_command(
    ctx: typer.Context,
    duration: Optional[int] = typer.Option(None, "--duration", "-d", help="Time budget in minutes"),
    split: str = typer.Option("auto", help="Split: upper|lower|full|auto"),
    restrict: Optional[List[str]] = typer.Option(
        None,
        "--restrict",
        "-r",
        help="Restricted body area (repeatable): lower_back|knee|shoulder|neck",
    ),
    seed: Optional[int] = typer.Option(None, help="Random seed for a reproducible plan"),
    no_save: bool = typer.Option(False, "--no-save", help="Do not store the plan as the current plan"),
    output_format: str = typer.Option("table", "--format", help="Output format: table|markdown"),
) -> None:
    """Generate a balanced workout that fits the time budget."""
    state = get_state(ctx)

    if output_format not in {"table", "markdown"}:
        raise typer.BadParameter("--format must be one of: table, markdown")

    budget = duration
    if budget is None:
        budget = int(state.config.get("workout", {}).get("default_duration", DEFAULT_DURATION_MINUTES))
    if budget < 0:
        raise typer.BadParameter("--duration must not be negative")

    restrictions = resolve_restrictions(state, restrict)
    store = open_store(state)
    if split == "auto":
        chosen_split = recommended_split(store.last_split)
        state.debug(f"Recommended split {chosen_split.value} after {store.last_split}")
    else:
        chosen_split = parse_choice(WorkoutSplit, split, "--split")

    catalog = load_catalog_for_state(state)
    plan = generate_workout(
        catalog,
        duration_budget=budget,
        restrictions=restrictions,
        split=chosen_split,
        rng=_rng(seed),
    )
    state.debug(f"Generated {len(plan)} exercises, {plan_duration(plan)} of {budget} minutes")

    if not no_save:
        store.set_current_plan(plan, chosen_split, budget)
        save_store(store)

    render_plan(state, plan, chosen_split, budget, restrictions, output_format=output_format)


def plan_command(ctx: typer.Context) -> None:
    """Show the current (not yet logged) plan."""
    state = get_state(ctx)
    store = open_store(state)
    info = store.current_plan_info()
    if not info:
        typer.echo("No current plan. Run 'zg generate' first.")
        raise typer.Exit(code=1)

    catalog = load_catalog_for_state(state)
    plan = store.current_plan(catalog)
    missing = set(store.current_plan_ids()) - {exercise.id for exercise in plan}
    for exercise_id in sorted(missing):
        typer.echo(f"Warning: exercise '{exercise_id}' is no longer in the catalog", err=True)

    render_plan(
        state,
        plan,
        WorkoutSplit.parse(info.get("split") or "full"),
        int(info.get("duration") or plan_duration(plan)),
        resolve_restrictions(state, None),
    )


def swap_command(
    ctx: typer.Context,
    exercise_id: str = typer.Argument(..., help="Id of the exercise to replace"),
    restrict: Optional[List[str]] = typer.Option(None, "--restrict", "-r", help="Restricted body area (repeatable)"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
) -> None:
    """Replace one exercise of the current plan with a same-group alternative."""
    state = get_state(ctx)
    store = open_store(state)
    info = store.current_plan_info()
    if not info:
        typer.echo("No current plan. Run 'zg generate' first.")
        raise typer.Exit(code=1)

    catalog = load_catalog_for_state(state)
    plan = store.current_plan(catalog)
    current = find_exercise(plan, exercise_id)
    if current is None:
        raise typer.BadParameter(f"'{exercise_id}' is not part of the current plan", param_hint="EXERCISE_ID")

    restrictions = resolve_restrictions(state, restrict)
    replacement = swap_exercise(current, plan, restrictions, catalog, rng=_rng(seed))

    if replacement is None:
        payload: Dict[str, Any] = {"status": "unavailable", "current": current.id, "replacement": None}
        if state.json_output:
            print_json_payload(state, payload)
        elif state.plain_output:
            typer.echo("status\tunavailable")
            typer.echo(f"current\t{current.id}")
        else:
            state.console.print(f"No replacement available for {current.name}.")
        return

    new_plan = replace_in_plan(plan, current, replacement)
    store.set_current_plan(
        new_plan,
        WorkoutSplit.parse(info.get("split") or "full"),
        int(info.get("duration") or plan_duration(new_plan)),
    )
    save_store(store)

    payload = {
        "status": "swapped",
        "current": current.id,
        "replacement": replacement.to_dict(),
        "planned_minutes": plan_duration(new_plan),
    }
    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo("status\tswapped")
        typer.echo(f"current\t{current.id}")
        typer.echo(f"replacement\t{replacement.id}")
        return
    state.console.print(
        f"Swapped {current.name} for {replacement.name} "
        f"({replacement.sets} x {replacement.reps}, ~{replacement.duration_minutes} min)"
    )


def split_command(
    ctx: typer.Context,
    last: Optional[str] = typer.Option(None, help="Previous split (defaults to the last logged session)"),
) -> None:
    """Recommend today's split from the previous one."""
    state = get_state(ctx)
    if last is not None:
        previous = parse_choice(WorkoutSplit, last, "--last")
    else:
        previous = open_store(state).last_split
    recommended = recommended_split(previous)

    payload = {"last_split": previous.value if previous else None, "recommended": recommended.value}
    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo(f"last_split\t{payload['last_split'] or '-'}")
        typer.echo(f"recommended\t{recommended.value}")
        return
    state.console.print(f"Last split: {split_label(previous)}")
    state.console.print(f"Recommended today: {split_label(recommended)}")
