"""Dashboard statistics and personal records commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from fit_cli.commands.common import (
    get_state,
    load_owner_workouts,
    print_json_payload,
    resolve_as_of,
    resolve_owner,
)
from fit_cli.core.constants import DEFAULT_WEEKLY_GOAL
from fit_cli.core.records import compute_personal_records
from fit_cli.core.stats import compute_stats, compute_weekly_progress
from fit_cli.utils.dates import safe_local_day, validate_timestamp
from fit_cli.utils.formatting import format_minutes, format_weight

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _day_label(value_ms: int) -> str:
    day = safe_local_day(value_ms)
    return day.isoformat() if day is not None else "unknown"


def stats_command(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner", help="Owner id (default: defaults.owner_id)"),
    store: Optional[Path] = typer.Option(None, "--store", help="Workout store file (JSON/YAML)"),
    goal: Optional[int] = typer.Option(None, "--goal", help="Weekly workout goal"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Evaluate at this time", callback=validate_timestamp),
) -> None:
    """Show totals, this week's count, streak and weekly goal progress."""
    state = get_state(ctx)
    owner_id = resolve_owner(state, owner)
    now = resolve_as_of(as_of)
    weekly_goal = goal if goal is not None else int(
        state.section("defaults").get("weekly_goal", DEFAULT_WEEKLY_GOAL)
    )

    workouts = load_owner_workouts(state, owner_id, store)
    snapshot = compute_stats(workouts, now=now)
    progress = compute_weekly_progress(workouts, weekly_goal, now=now)

    if state.json_output:
        print_json_payload(
            state,
            {"ownerId": owner_id, "stats": snapshot.to_dict(), "weeklyProgress": progress.to_dict()},
        )
        return

    if state.plain_output:
        typer.echo(f"total_workouts\t{snapshot.total_workouts}")
        typer.echo(f"total_minutes\t{snapshot.total_minutes}")
        typer.echo(f"this_week_workouts\t{snapshot.this_week_workouts}")
        typer.echo(f"current_streak\t{snapshot.current_streak}")
        typer.echo(f"weekly_goal\t{progress.completed_this_week}/{progress.weekly_goal}")
        typer.echo(f"percent_complete\t{progress.percent_complete}")
        return

    table = Table(title=f"Stats for {owner_id}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total workouts", str(snapshot.total_workouts))
    table.add_row("Total time", format_minutes(snapshot.total_minutes))
    table.add_row("Last 7 days", str(snapshot.this_week_workouts))
    table.add_row("Current streak", f"{snapshot.current_streak} day(s)")
    state.console.print(table)

    days = ", ".join(WEEKDAY_NAMES[day] for day in progress.days_with_workouts) or "none yet"
    state.console.print(
        f"Weekly goal: {progress.completed_this_week}/{progress.weekly_goal} "
        f"({progress.percent_complete}%) - trained on {days}"
    )


def records_command(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner", help="Owner id (default: defaults.owner_id)"),
    store: Optional[Path] = typer.Option(None, "--store", help="Workout store file (JSON/YAML)"),
) -> None:
    """List personal records per exercise."""
    state = get_state(ctx)
    owner_id = resolve_owner(state, owner)
    records = compute_personal_records(load_owner_workouts(state, owner_id, store))

    if state.json_output:
        print_json_payload(state, {"ownerId": owner_id, "records": [record.to_dict() for record in records]})
        return

    if state.plain_output:
        for record in records:
            typer.echo(
                f"{record.exercise_name}\t{format_weight(record.max_weight)}\t{record.max_reps}\t"
                f"{_day_label(record.date)}"
            )
        return

    if not records:
        state.console.print("No personal records yet. Log exercises with sets to start tracking.")
        return

    table = Table(title=f"Personal records for {owner_id}")
    table.add_column("Exercise")
    table.add_column("Max weight", justify="right")
    table.add_column("Max reps", justify="right")
    table.add_column("Set on")
    for record in records:
        table.add_row(
            record.exercise_name,
            format_weight(record.max_weight),
            str(record.max_reps),
            _day_label(record.date),
        )
    state.console.print(table)
