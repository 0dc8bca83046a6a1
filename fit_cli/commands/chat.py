"""Assistant chat command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.text import Text

from fit_cli.commands.common import get_state, print_json_payload, report_error
from fit_cli.core.chat import ChatAdvisor, truncate_history
from fit_cli.core.constants import CHAT_HISTORY_LIMIT
from fit_cli.core.models import ChatTurn
from fit_cli.utils.parsing import load_chat_history, save_chat_history


def chat_command(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Question for the assistant"),
    history_file: Optional[Path] = typer.Option(
        None,
        "--history",
        help="JSON file holding the conversation; updated after the reply",
    ),
) -> None:
    """Ask the in-app assistant a question."""
    state = get_state(ctx)
    if not message.strip():
        raise typer.BadParameter("message must not be empty")

    limit = int(state.section("chat").get("history_limit", CHAT_HISTORY_LIMIT))
    try:
        history = truncate_history(load_chat_history(history_file), limit)
    except (ValueError, yaml.YAMLError) as exc:
        report_error(state, f"Failed to read chat history {history_file}: {exc}")

    with state.spinner("Thinking..."):
        reply = ChatAdvisor(state.config).chat(message, history)

    if history_file is not None and reply.error is None:
        updated = history + [
            ChatTurn(role="user", content=message),
            ChatTurn(role="assistant", content=reply.response),
        ]
        save_chat_history(history_file, truncate_history(updated, limit))

    if state.json_output:
        print_json_payload(state, reply.to_dict())
        return

    if state.plain_output:
        typer.echo(reply.response)
        if reply.error:
            typer.echo(f"error\t{reply.error}")
        return

    state.console.print(reply.response, markup=False)
    if reply.error and state.verbose:
        state.console.print(Text(f"({reply.error})", style="dim"))
