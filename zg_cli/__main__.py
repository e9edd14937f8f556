"""Entry point for zg."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from zg_cli import __version__
from zg_cli.commands import catalog as catalog_commands
from zg_cli.commands import profile as profile_commands
from zg_cli.commands.export import export_command
from zg_cli.commands.sessions import history_command, log_command, summary_command
from zg_cli.commands.workout import generate_command, plan_command, split_command, swap_command
from zg_cli.core.config import (
    ConfigError,
    calories_per_minute,
    default_config_path,
    load_config,
    resolve_catalog_path,
)
from zg_cli.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Zengym workout planner",
    invoke_without_command=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Path to a custom exercise catalog"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
        calories_per_minute(cfg)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        catalog_path=resolve_catalog_path(cfg, explicit=catalog),
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("generate")(generate_command)
app.command("plan")(plan_command)
app.command("swap")(swap_command)
app.command("split")(split_command)
app.command("log")(log_command)
app.command("history")(history_command)
app.command("summary")(summary_command)
app.command("export")(export_command)
app.add_typer(catalog_commands.app, name="catalog")
app.add_typer(profile_commands.app, name="profile")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
