from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest
import requests

from fit_cli.core.ai import (
    AIClient,
    AIError,
    build_ai_client,
    call_with_fallback,
    extract_content,
)


class _MockResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._invalid_json = invalid_json
        self.text = "" if invalid_json else json.dumps(self._payload)

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def _completion(content: Any) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_client_posts_chat_completion_payload(monkeypatch) -> None:
    calls: List[Dict[str, Any]] = []

    def fake_post(url, headers=None, json=None, timeout=None):  # type: ignore[no-untyped-def]
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return _MockResponse(payload=_completion("hello"))

    monkeypatch.setattr("fit_cli.core.ai.requests.post", fake_post)

    client = AIClient(api_key="sk-1", base_url="https://ai.example.com/v1/", timeout_seconds=7)
    content = client.complete([{"role": "user", "content": "hi"}])

    assert content == "hello"
    assert len(calls) == 1
    assert calls[0]["url"] == "https://ai.example.com/v1/chat/completions"
    assert calls[0]["headers"] == {"Authorization": "Bearer sk-1", "Content-Type": "application/json"}
    assert calls[0]["json"] == {
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "hi"}],
        "temperature": 0.7,
        "max_tokens": 500,
    }
    assert calls[0]["timeout"] == 7


def test_client_raises_on_non_2xx_without_retrying(monkeypatch) -> None:
    attempts = {"count": 0}

    def fake_post(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        return _MockResponse(status_code=503, payload={"error": "busy"})

    monkeypatch.setattr("fit_cli.core.ai.requests.post", fake_post)

    with pytest.raises(AIError, match="API error: 503") as excinfo:
        AIClient(api_key="sk-1").complete([])
    assert excinfo.value.status_code == 503
    assert attempts["count"] == 1


def test_client_wraps_network_errors(monkeypatch) -> None:
    def fake_post(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise requests.ConnectionError("network down")

    monkeypatch.setattr("fit_cli.core.ai.requests.post", fake_post)

    with pytest.raises(AIError, match="network down"):
        AIClient(api_key="sk-1").complete([])


def test_client_rejects_non_json_body(monkeypatch) -> None:
    monkeypatch.setattr(
        "fit_cli.core.ai.requests.post",
        lambda *args, **kwargs: _MockResponse(invalid_json=True),
    )
    with pytest.raises(AIError, match="Invalid JSON body"):
        AIClient(api_key="sk-1").complete([])


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": 42}}]},
        ["not", "an", "object"],
    ],
)
def test_extract_content_returns_none_for_missing_content(body: Any) -> None:
    assert extract_content(body) is None


def test_build_ai_client_reads_key_at_call_time(monkeypatch, offline_config: Dict[str, Any]) -> None:
    assert build_ai_client(offline_config) is None

    monkeypatch.setenv("FIT_TEST_AI_KEY", "sk-late")
    client = build_ai_client(offline_config)
    assert client is not None
    assert client.api_key == "sk-late"


def test_build_ai_client_uses_config(ai_config: Dict[str, Any]) -> None:
    ai_config["ai"]["temperature"] = 0.2
    client = build_ai_client(ai_config)
    assert client is not None
    assert client.base_url == "https://ai.example.com/v1"
    assert client.temperature == 0.2
    assert client.max_tokens == 500
    assert client.timeout_seconds == 5


def test_build_ai_client_respects_disabled_flag(ai_config: Dict[str, Any]) -> None:
    ai_config["ai"]["enabled"] = False
    assert build_ai_client(ai_config) is None


def test_build_ai_client_ignores_blank_key(monkeypatch, offline_config: Dict[str, Any]) -> None:
    monkeypatch.setenv("FIT_TEST_AI_KEY", "   ")
    assert build_ai_client(offline_config) is None


def test_call_with_fallback_without_client_skips_remote() -> None:
    def build_messages():  # type: ignore[no-untyped-def]
        raise AssertionError("messages should not be built offline")

    result = call_with_fallback(lambda: None, build_messages, lambda content: "parsed", lambda exc: f"fallback:{exc}")
    assert result == "fallback:None"


class _StubClient:
    def __init__(self, content: Any = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls = 0

    def complete(self, messages):  # type: ignore[no-untyped-def]
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.content


def test_call_with_fallback_returns_parsed_content() -> None:
    client = _StubClient(content="42")
    result = call_with_fallback(lambda: client, lambda: [], lambda content: int(content), lambda exc: -1)  # type: ignore[arg-type]
    assert result == 42
    assert client.calls == 1


@pytest.mark.parametrize("error", [AIError("API error: 500", status_code=500), ValueError("bad json")])
def test_call_with_fallback_routes_errors_to_fallback(error: Exception) -> None:
    client = _StubClient(error=error)
    seen: List[Exception | None] = []

    def fallback(exc):  # type: ignore[no-untyped-def]
        seen.append(exc)
        return "fallback"

    assert call_with_fallback(lambda: client, lambda: [], lambda content: content, fallback) == "fallback"  # type: ignore[arg-type]
    assert seen == [error]
    assert client.calls == 1


def test_call_with_fallback_handles_parse_failures() -> None:
    client = _StubClient(content="not a number")
    result = call_with_fallback(lambda: client, lambda: [], lambda content: int(content), lambda exc: -1)  # type: ignore[arg-type]
    assert result == -1


@pytest.mark.parametrize(
    "setting, value",
    [("temperature", "warm"), ("max_tokens", "lots"), ("timeout_seconds", None)],
)
def test_build_ai_client_rejects_malformed_numbers(ai_config: Dict[str, Any], setting: str, value: Any) -> None:
    ai_config["ai"][setting] = value
    with pytest.raises((ValueError, TypeError)):
        build_ai_client(ai_config)


def test_call_with_fallback_routes_client_setup_errors_to_fallback(ai_config: Dict[str, Any]) -> None:
    ai_config["ai"]["temperature"] = "warm"
    seen: List[Exception | None] = []

    def build_messages():  # type: ignore[no-untyped-def]
        raise AssertionError("messages should not be built without a client")

    def fallback(exc):  # type: ignore[no-untyped-def]
        seen.append(exc)
        return "fallback"

    result = call_with_fallback(lambda: build_ai_client(ai_config), build_messages, lambda content: content, fallback)
    assert result == "fallback"
    assert len(seen) == 1
    assert isinstance(seen[0], ValueError)
