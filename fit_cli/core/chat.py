"""In-app assistant chat with canned offline and failure replies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from fit_cli.core.ai import AIError, build_ai_client, call_with_fallback
from fit_cli.core.constants import (
    APP_CONTEXT,
    CHAT_CONNECTION_RESPONSE,
    CHAT_EMPTY_ERROR,
    CHAT_EMPTY_RESPONSE,
    CHAT_HISTORY_LIMIT,
    CHAT_OFFLINE_ERROR,
    CHAT_OFFLINE_RESPONSE,
)
from fit_cli.core.models import ChatReply, ChatTurn


def truncate_history(history: Sequence[ChatTurn], limit: int = CHAT_HISTORY_LIMIT) -> List[ChatTurn]:
    """Keep the last `limit` turns."""
    if limit <= 0:
        return []
    return list(history)[-limit:]


def build_chat_messages(message: str, history: Optional[Sequence[ChatTurn]] = None) -> List[Dict[str, str]]:
    """System context, then the history as given, then the new user message."""
    messages = [{"role": "system", "content": APP_CONTEXT}]
    messages.extend(turn.to_dict() for turn in (history or []))
    messages.append({"role": "user", "content": message})
    return messages


def _reply_from_content(content: Optional[str]) -> ChatReply:
    if not content or not content.strip():
        return ChatReply(response=CHAT_EMPTY_RESPONSE, error=CHAT_EMPTY_ERROR)
    return ChatReply(response=content)


def _fallback_reply(exc: Optional[Exception]) -> ChatReply:
    if exc is None:
        return ChatReply(response=CHAT_OFFLINE_RESPONSE, error=CHAT_OFFLINE_ERROR)
    error = str(exc) if isinstance(exc, AIError) else f"{type(exc).__name__}: {exc}"
    return ChatReply(response=CHAT_CONNECTION_RESPONSE, error=error)


class ChatAdvisor:
    """Forwards one user message to the remote assistant; never raises."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or {}

    def chat(self, message: str, history: Optional[Sequence[ChatTurn]] = None) -> ChatReply:
        return call_with_fallback(
            lambda: build_ai_client(self.config),
            lambda: build_chat_messages(message, history),
            _reply_from_content,
            _fallback_reply,
        )
