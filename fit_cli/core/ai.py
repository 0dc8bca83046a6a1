"""Chat-completions client and the shared remote-call-with-fallback helper."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests

from fit_cli.core.config import resolve_api_key
from fit_cli.core.constants import AI_BASE_URL, AI_MAX_TOKENS, AI_MODEL, AI_TEMPERATURE

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AIError(RuntimeError):
    """Raised when the chat-completions call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AIClient:
    """Single-attempt wrapper around an OpenAI-compatible chat-completions API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = AI_BASE_URL,
        model: str = AI_MODEL,
        temperature: float = AI_TEMPERATURE,
        max_tokens: int = AI_MAX_TOKENS,
        timeout_seconds: int = 30,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def complete(self, messages: List[Dict[str, str]]) -> Optional[str]:
        """POST once and return the first choice's content, or None if absent."""
        url = f"{self.base_url}/chat/completions"
        try:
            response = requests.post(
                url,
                headers=self._headers,
                json=self.build_payload(messages),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise AIError(f"Request to {url} failed: {exc}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise AIError(f"API error: {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise AIError(f"Invalid JSON body from {url}: {exc}") from exc

        return extract_content(data)


def extract_content(data: Any) -> Optional[str]:
    """Pull `choices[0].message.content` out of a response body."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None


def build_ai_client(config: Dict[str, Any]) -> Optional[AIClient]:
    """Create a client from config, or None when AI is disabled or unkeyed."""
    ai_cfg = config.get("ai", {})
    if not ai_cfg.get("enabled", True):
        return None

    api_key = resolve_api_key(config)
    if not api_key:
        return None

    return AIClient(
        api_key=api_key,
        base_url=str(ai_cfg.get("base_url") or AI_BASE_URL),
        model=str(ai_cfg.get("model") or AI_MODEL),
        temperature=float(ai_cfg.get("temperature", AI_TEMPERATURE)),
        max_tokens=int(ai_cfg.get("max_tokens", AI_MAX_TOKENS)),
        timeout_seconds=int(ai_cfg.get("timeout_seconds", 30)),
    )


def call_with_fallback(
    make_client: Callable[[], Optional[AIClient]],
    build_messages: Callable[[], List[Dict[str, str]]],
    parse: Callable[[Optional[str]], T],
    fallback: Callable[[Optional[Exception]], T],
) -> T:
    """Make at most one remote call, handing any failure to `fallback`.

    `make_client` runs inside the guard so malformed AI settings degrade the
    same way a failed request does. `fallback` receives None when no client
    is configured, otherwise the exception that ended the attempt.
    """
    try:
        client = make_client()
    except (ValueError, TypeError) as exc:
        logger.warning("Invalid AI settings, using local fallback: %s", exc)
        return fallback(exc)

    if client is None:
        logger.debug("No AI client configured; using local fallback")
        return fallback(None)

    try:
        content = client.complete(build_messages())
        return parse(content)
    except (AIError, ValueError, TypeError) as exc:
        logger.warning("AI call failed, using local fallback: %s", exc)
        return fallback(exc)
