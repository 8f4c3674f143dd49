"""Tests for the OpenRouter adapter using a fake SDK client."""

from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError, AuthenticationError

from prompt_optimizer.adapters.openrouter_adapter import DEFAULT_MODEL, MAX_ATTEMPTS, OpenRouterAdapter
from prompt_optimizer.errors import MissingApiKeyError, ProviderError

REQUEST = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")


class FakeCompletions:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=None)


@pytest.fixture(autouse=True)
def _defaults(monkeypatch):
    for name in ("OPENROUTER_MODEL", "OPTIMIZER_MAX_OUTPUT_TOKENS", "OPTIMIZER_TEMPERATURE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("prompt_optimizer.adapters.openrouter_adapter.time.sleep", lambda seconds: None)


def _adapter(outcomes):
    adapter = OpenRouterAdapter("sk-or-test")
    completions = FakeCompletions(outcomes)
    adapter.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return adapter, completions


class TestOpenRouterAdapter:
    def test_missing_key(self):
        with pytest.raises(MissingApiKeyError):
            OpenRouterAdapter(None)

    def test_sends_system_and_user_messages(self):
        adapter, completions = _adapter([_response("**Goal**\nX")])
        assert adapter.complete("system text", "user text").raw_text == "**Goal**\nX"
        call = completions.calls[0]
        assert call["model"] == DEFAULT_MODEL
        assert call["messages"] == [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ]
        assert call["max_tokens"] == 1000
        assert call["temperature"] == 0.7

    def test_missing_content_is_empty_text(self):
        adapter, _ = _adapter([_response(None)])
        assert adapter.generate("s", "u") == ""

    def test_retries_connection_errors(self):
        adapter, completions = _adapter([APIConnectionError(request=REQUEST), _response("done")])
        assert adapter.generate("s", "u") == "done"
        assert len(completions.calls) == 2

    def test_gives_up_after_max_attempts(self):
        errors = [APIConnectionError(request=REQUEST) for _ in range(MAX_ATTEMPTS)]
        adapter, completions = _adapter(errors)
        with pytest.raises(ProviderError):
            adapter.generate("s", "u")
        assert len(completions.calls) == MAX_ATTEMPTS

    def test_auth_error_is_not_retried(self):
        error = AuthenticationError(
            "Invalid API key",
            response=httpx.Response(401, request=REQUEST),
            body=None,
        )
        adapter, completions = _adapter([error])
        with pytest.raises(ProviderError, match="Invalid API key"):
            adapter.generate("s", "u")
        assert len(completions.calls) == 1
