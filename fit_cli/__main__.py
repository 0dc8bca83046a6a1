"""Entry point for fit-cli."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fit_cli import __version__
from fit_cli.commands.chat import chat_command
from fit_cli.commands.recover import recover_command
from fit_cli.commands.stats import records_command, stats_command
from fit_cli.core.config import ConfigError, default_config_path, load_config
from fit_cli.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Workout statistics and recovery advice",
    invoke_without_command=True,
)


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route fit_cli log records to stderr through rich."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logger = logging.getLogger("fit_cli")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=verbose,
            rich_tracebacks=verbose,
        )
    )
    logger.setLevel(level)
    logger.propagate = False


def build_state(
    json_output: bool,
    plain_output: bool,
    verbose: bool,
    quiet: bool,
    config_path: Path,
    config: Dict[str, Any],
) -> CLIState:
    console = Console(quiet=quiet, no_color=plain_output, log_time=False, log_path=False)
    return CLIState(
        json_output=json_output,
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=config_path,
        config=config,
        console=console,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Emit JSON payloads"),
    plain_output: bool = typer.Option(False, "--plain", help="Tab-separated lines for scripts, no tables or colour"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file (TOML or JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only; silence rich console output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Load config, set up logging and stash a CLIState for the command."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = build_state(json_output, plain_output, verbose, quiet, cfg_path, cfg)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.command("stats")(stats_command)
app.command("records")(records_command)
app.command("recover")(recover_command)
app.command("chat")(chat_command)


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
