"""Tests for the Anthropic adapter against a local stand-in server."""

import os

import pytest

from ask_ai.adapters.anthropic import (
    ANTHROPIC_VERSION,
    DEFAULT_MAX_TOKENS,
    AnthropicAdapter,
)
from ask_ai.config import Provider, ProviderConfig
from ask_ai.conversation import ConversationRequest, ConversationTurn
from ask_ai.dispatch import ask
from ask_ai.errors import ApiError, ModelError
from ask_ai.secrets import StaticSecretProvider

CONFIG = ProviderConfig(provider=Provider.ANTHROPIC, model="claude-2", max_tokens=80)


def _adapter(server, api_key="anthropic_testkey"):
    values = {"ANTHROPIC_API_URL": f"{server.base_url}/v1/messages"}
    if api_key:
        values["ANTHROPIC_API_KEY"] = api_key
    return AnthropicAdapter(secrets=StaticSecretProvider(values))


class TestAnthropicAdapter:
    def test_success_and_wire_format(self, stub_server):
        stub_server.respond(200, {"content": [{"text": "Answers from Claude (mock)!"}]})
        request = ConversationRequest(new_prompt="Anthropic question!", system_prompt="You are friendly.")

        answer = _adapter(stub_server).send(request, CONFIG)

        assert answer == "Answers from Claude (mock)!"
        sent = stub_server.requests[0]
        assert sent.path == "/v1/messages"
        assert sent.headers["x-api-key"] == "anthropic_testkey"
        assert sent.headers["anthropic-version"] == ANTHROPIC_VERSION == "2023-06-01"
        assert sent.headers["content-type"] == "application/json"
        payload = sent.json()
        assert payload["system"] == "You are friendly."
        assert payload["messages"][-1]["content"][-1]["text"] == "Anthropic question!"
        assert payload["model"] == "claude-2"
        assert payload["max_tokens"] == 80

    def test_system_prompt_is_not_a_message(self, stub_server):
        stub_server.respond(200, {"content": [{"text": "ok"}]})
        request = ConversationRequest(
            new_prompt="Why is the sky blue?",
            system_prompt="You are a test system.",
            history=[
                ConversationTurn("Hello, Claude!", "Hi there, user!"),
                ConversationTurn("What's up?", "Answer."),
            ],
        )

        _adapter(stub_server).send(request, CONFIG)

        messages = stub_server.requests[0].json()["messages"]
        assert [m["role"] for m in messages] == ["user", "assistant", "user", "assistant", "user"]
        assert messages[0]["content"] == [{"type": "text", "text": "Hello, Claude!"}]

    def test_defaults_for_system_and_max_tokens(self, stub_server):
        stub_server.respond(200, {"content": [{"text": "ok"}]})
        config = ProviderConfig(provider=Provider.ANTHROPIC, model="claude-2")

        _adapter(stub_server).send(ConversationRequest(new_prompt=""), config)

        payload = stub_server.requests[0].json()
        assert payload["system"] == ""
        assert payload["max_tokens"] == DEFAULT_MAX_TOKENS == 1024
        assert payload["messages"] == [{"role": "user", "content": [{"type": "text", "text": "."}]}]

    def test_zero_max_tokens_is_sent_as_is(self, stub_server):
        stub_server.respond(200, {"content": [{"text": "ok"}]})
        config = ProviderConfig(provider=Provider.ANTHROPIC, model="claude-2", max_tokens=0)

        _adapter(stub_server).send(ConversationRequest(new_prompt="x"), config)

        assert stub_server.requests[0].json()["max_tokens"] == 0

    def test_empty_content_is_model_error(self, stub_server):
        stub_server.respond(200, {"content": []})

        with pytest.raises(ModelError) as excinfo:
            _adapter(stub_server, api_key="badkey").send(ConversationRequest(new_prompt="blah"), CONFIG)

        assert excinfo.value.model_name == "claude-2"
        assert "Failed to extract content" in excinfo.value.failure
        assert len(stub_server.requests) == 1

    def test_unsupported_model_is_api_error(self, stub_server):
        model = "claude-nonexistent-model"
        stub_server.respond(
            400,
            {
                "type": "error",
                "error": {"type": "model_not_supported", "message": f"Model not supported: {model}"},
            },
        )
        config = ProviderConfig(provider=Provider.ANTHROPIC, model=model, max_tokens=256)

        with pytest.raises(ApiError) as excinfo:
            _adapter(stub_server, api_key="fake_anthropic_key").send(
                ConversationRequest(new_prompt="Will this fail?"), config
            )

        assert excinfo.value.provider_name == "anthropic"
        assert "Status 400" in excinfo.value.failure
        assert "model_not_supported" in excinfo.value.failure

    def test_missing_api_key(self, stub_server):
        with pytest.raises(ApiError) as excinfo:
            _adapter(stub_server, api_key=None).send(ConversationRequest(new_prompt="x"), CONFIG)

        assert "Missing or invalid ANTHROPIC_API_KEY" in excinfo.value.failure
        assert str(excinfo.value).startswith("Error loading API anthropic. Error: ")
        assert stub_server.requests == []


def _live_tests_enabled(environ=os.environ):
    return environ.get("ASK_AI_LIVE_TESTS") == "1" and bool(environ.get("ANTHROPIC_API_KEY"))


@pytest.mark.parametrize(
    "environ, enabled",
    [
        ({}, False),
        ({"ANTHROPIC_API_KEY": "sk-ant-real-looking"}, False),
        ({"ASK_AI_LIVE_TESTS": "1"}, False),
        ({"ASK_AI_LIVE_TESTS": "1", "ANTHROPIC_API_KEY": "sk-ant"}, True),
    ],
)
def test_live_tests_need_explicit_opt_in(environ, enabled):
    assert _live_tests_enabled(environ) is enabled


@pytest.mark.skipif(not _live_tests_enabled(), reason="set ASK_AI_LIVE_TESTS=1 and ANTHROPIC_API_KEY to call the real API")
def test_real_api_rejects_unknown_model(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_URL", raising=False)
    config = ProviderConfig(provider=Provider.ANTHROPIC, model="claude-non-existing-xyz", max_tokens=128)
    request = ConversationRequest(
        new_prompt="Does this model exist?", system_prompt="You are a helpful assistant."
    )

    with pytest.raises(ApiError) as excinfo:
        ask(config, request)

    if excinfo.value.failure.startswith("Request error"):
        pytest.skip(f"Anthropic API unreachable: {excinfo.value.failure}")
    assert excinfo.value.provider_name == "anthropic"
    failure = excinfo.value.failure.lower()
    assert any(
        marker in failure
        for marker in ("model not supported", "unsupported model", "not_found_error", "404")
    )
