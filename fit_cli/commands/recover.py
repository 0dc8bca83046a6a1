"""Recovery recommendation command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.text import Text

from fit_cli.commands.common import (
    get_state,
    load_owner_workouts,
    print_json_payload,
    resolve_as_of,
    resolve_owner,
)
from fit_cli.core.cache import RecommendationCache, workouts_fingerprint
from fit_cli.core.config import resolve_cache_dir
from fit_cli.core.constants import RECOVERY_MIN_REFRESH_SECONDS, STATUS_LABELS
from fit_cli.core.fatigue import compute_fatigue
from fit_cli.core.recovery import RecoveryAdvisor
from fit_cli.utils.dates import resolve_now, validate_timestamp
from fit_cli.utils.formatting import fatigue_meter

STATUS_STYLES = {
    "rest": "bold red",
    "light": "yellow",
    "moderate": "cyan",
    "ready": "bold green",
}


def recover_command(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner", help="Owner id (default: defaults.owner_id)"),
    store: Optional[Path] = typer.Option(None, "--store", help="Workout store file (JSON/YAML)"),
    name: Optional[str] = typer.Option(None, "--name", help="Name to address in the advice"),
    refresh: bool = typer.Option(False, "--refresh", help="Ignore a recent cached recommendation"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Evaluate at this time", callback=validate_timestamp),
) -> None:
    """Recommend rest, light, moderate or full training for today."""
    state = get_state(ctx)
    owner_id = resolve_owner(state, owner)
    now = resolve_now(resolve_as_of(as_of))

    summaries = [record.summary() for record in load_owner_workouts(state, owner_id, store)]
    fatigue = compute_fatigue(summaries, now=now)

    cache_dir = resolve_cache_dir(state.config)
    cache = (
        RecommendationCache(
            cache_dir,
            float(state.section("recovery").get("min_refresh_seconds", RECOVERY_MIN_REFRESH_SECONDS)),
        )
        if cache_dir is not None
        else None
    )
    fingerprint = workouts_fingerprint(summaries, user_name=name)

    recommendation = None
    if cache is not None and not refresh:
        recommendation = cache.get(owner_id, fingerprint, now=now)

    cached = recommendation is not None
    if recommendation is None:
        with state.spinner("Analyzing recent training..."):
            recommendation = RecoveryAdvisor(state.config).get_recovery_recommendation(
                summaries, user_name=name, now=now
            )
        if cache is not None:
            cache.put(owner_id, fingerprint, recommendation, now=now)

    if state.json_output:
        print_json_payload(
            state,
            {
                "ownerId": owner_id,
                "recommendation": recommendation.to_dict(),
                "fatigue": fatigue.to_dict(),
                "cached": cached,
            },
        )
        return

    status = recommendation.status.value
    if state.plain_output:
        typer.echo(f"status\t{status}")
        typer.echo(f"title\t{recommendation.title}")
        typer.echo(f"message\t{recommendation.message}")
        for tip in recommendation.tips:
            typer.echo(f"tip\t{tip}")
        typer.echo(f"insights\t{recommendation.insights}")
        if recommendation.suggested_workout:
            typer.echo(f"suggested_workout\t{recommendation.suggested_workout}")
        typer.echo(f"fatigue_score\t{fatigue.fatigue_score:.1f}")
        typer.echo(f"consecutive_days\t{fatigue.consecutive_days}")
        return

    style = STATUS_STYLES.get(status, "bold")
    state.console.print(Text.assemble((STATUS_LABELS[status], style), "  ", recommendation.title))
    state.console.print(recommendation.message, markup=False)
    state.console.print(
        f"Fatigue {fatigue_meter(fatigue.fatigue_score)} {fatigue.fatigue_score:.0f}/100"
        f"  |  {fatigue.consecutive_days} day(s) in a row"
    )
    for tip in recommendation.tips[:4]:
        state.console.print(f"  • {tip}", markup=False)
    if recommendation.suggested_workout:
        state.console.print(f"Suggested: {recommendation.suggested_workout}", markup=False)
    state.console.print(Text(recommendation.insights, style="dim"))
    if cached:
        state.console.print("[dim](cached; use --refresh to ask again)[/]")
