"""Shared command helpers."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from fit_cli.core.config import resolve_store_path
from fit_cli.core.models import WorkoutRecord
from fit_cli.core.state import CLIState
from fit_cli.core.store import FileWorkoutStore, StoreError
from fit_cli.utils.dates import parse_timestamp


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def report_error(state: CLIState, message: str, code: int = 1) -> NoReturn:
    """Render an error in the active output mode and exit."""
    if state.json_output:
        print_json_payload(state, {"status": "error", "message": message})
    elif state.plain_output:
        typer.echo("status\terror")
        typer.echo(f"message\t{message}")
    else:
        state.console.print(f"Error: {message}")
    raise typer.Exit(code=code)


def resolve_owner(state: CLIState, owner: Optional[str]) -> str:
    """CLI --owner first, then defaults.owner_id."""
    owner_id = owner or state.section("defaults").get("owner_id")
    if not owner_id:
        raise typer.BadParameter("Provide --owner or set defaults.owner_id in the config file")
    return str(owner_id)


def resolve_as_of(as_of: Optional[str]) -> Optional[datetime]:
    return parse_timestamp(as_of) if as_of else None


def build_store(state: CLIState, store_path: Optional[Path] = None) -> FileWorkoutStore:
    return FileWorkoutStore(resolve_store_path(state.config, store_path))


def load_owner_workouts(
    state: CLIState,
    owner_id: str,
    store_path: Optional[Path] = None,
) -> List[WorkoutRecord]:
    """Fetch one owner's workouts, exiting with code 1 on a broken store."""
    store = build_store(state, store_path)
    try:
        return store.list_by_owner(owner_id)
    except StoreError as exc:
        report_error(state, str(exc))
