"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence, Type, TypeVar

import typer

from zg_cli.core.catalog import load_catalog_or_empty
from zg_cli.core.config import resolve_store_path
from zg_cli.core.models import BodyArea, ChoiceEnum, Exercise, UserProfile
from zg_cli.core.state import CLIState
from zg_cli.core.store import LocalStore, StoreError

E = TypeVar("E", bound=ChoiceEnum)


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def load_catalog_for_state(state: CLIState) -> List[Exercise]:
    """Load the exercise catalog; an unavailable catalog degrades to empty."""
    catalog, error = load_catalog_or_empty(state.catalog_path)
    if error:
        typer.echo(f"Warning: {error}", err=True)
    state.debug(f"Loaded {len(catalog)} exercises from {state.catalog_path or 'bundled catalog'}")
    return catalog


def open_store(state: CLIState) -> LocalStore:
    path = resolve_store_path(state.config)
    state.debug(f"Using store {path}")
    try:
        return LocalStore.load(path)
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=2)


def save_store(store: LocalStore) -> None:
    try:
        store.save()
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=2)


def parse_choice(enum_cls: Type[E], value: str, option: str) -> E:
    try:
        return enum_cls.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=option)


def parse_choices(enum_cls: Type[E], values: Optional[Sequence[str]], option: str) -> List[E]:
    try:
        return enum_cls.parse_many(values)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=option)


def resolve_restrictions(state: CLIState, values: Optional[Sequence[str]]) -> List[BodyArea]:
    """Explicit --restrict values win; otherwise use the profile's restrictions."""
    if values:
        return parse_choices(BodyArea, values, "--restrict")
    try:
        return UserProfile.from_config(state.config).restrictions
    except ValueError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)
