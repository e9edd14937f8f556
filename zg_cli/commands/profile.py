"""User profile commands."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import typer
from rich.table import Table

from zg_cli.commands.common import get_state, open_store, parse_choices, print_json_payload
from zg_cli.core.config import save_config
from zg_cli.core.constants import BODY_AREA_DESCRIPTIONS, BODY_AREA_LABELS
from zg_cli.core.history import profile_totals
from zg_cli.core.models import BodyArea, UserProfile
from zg_cli.core.store import StoreError
from zg_cli.utils.formatting import format_areas, format_minutes, format_volume

app = typer.Typer(help="Profile and restriction settings")


def _load_profile(config: dict) -> UserProfile:
    try:
        return UserProfile.from_config(config)
    except ValueError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Show the profile, restrictions and lifetime totals."""
    state = get_state(ctx)
    profile = _load_profile(state.config)
    try:
        totals = profile_totals(open_store(state).sessions)
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=2)

    payload = {
        "name": profile.name,
        "restrictions": [area.value for area in profile.restrictions],
        "onboarding_complete": profile.onboarding_complete,
        "created_at": profile.created_at,
        "totals": totals,
    }
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"name\t{profile.name or '-'}")
        typer.echo(f"restrictions\t{','.join(payload['restrictions']) or '-'}")
        typer.echo(f"sessions\t{totals['sessions']}")
        typer.echo(f"minutes\t{totals['minutes']}")
        typer.echo(f"volume\t{totals['volume']}")
        return

    state.console.print(f"Name: {profile.name or '(not set)'}")
    state.console.print(f"Restrictions: {format_areas(profile.restrictions)}")
    state.console.print(
        f"Totals: {totals['sessions']} workouts, {format_minutes(totals['minutes'])}, {format_volume(totals['volume'])}"
    )

    table = Table(title="Body areas")
    table.add_column("Area")
    table.add_column("Restricted")
    table.add_column("Description")
    for area in BodyArea:
        table.add_row(
            BODY_AREA_LABELS[area],
            "yes" if profile.has_restriction(area) else "no",
            BODY_AREA_DESCRIPTIONS[area],
        )
    state.console.print(table)


@app.command("set")
def set_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, help="Display name"),
    restrict: Optional[List[str]] = typer.Option(
        None,
        "--restrict",
        "-r",
        help="Add a restricted body area (repeatable): lower_back|knee|shoulder|neck",
    ),
    clear_restrictions: bool = typer.Option(False, help="Remove all restrictions first"),
) -> None:
    """Update the profile stored in the config file."""
    state = get_state(ctx)
    profile = _load_profile(state.config)

    if name is not None:
        profile.name = name.strip()
    if clear_restrictions:
        profile.restrictions = []
    for area in parse_choices(BodyArea, restrict, "--restrict"):
        if not profile.has_restriction(area):
            profile.restrictions.append(area)
    profile.onboarding_complete = True
    if not profile.created_at:
        profile.created_at = datetime.now().isoformat(timespec="seconds")

    state.config["profile"] = profile.to_config()
    path = save_config(state.config, state.config_path)
    state.debug(f"Wrote profile to {path}")

    payload = {"status": "saved", "config": str(path), "profile": state.config["profile"]}
    if state.json_output:
        print_json_payload(state, payload)
        return
    if state.plain_output:
        typer.echo("status\tsaved")
        typer.echo(f"restrictions\t{','.join(state.config['profile']['restrictions']) or '-'}")
        return
    state.console.print(f"Saved profile to {path}")
    state.console.print(f"Restrictions: {format_areas(profile.restrictions)}")
