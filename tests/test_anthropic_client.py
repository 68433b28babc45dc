import json

import pytest
import requests

from pdfassist.exceptions import (
    EmptyCompletionError,
    NoCompletionError,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderNetworkError,
    ProviderTimeoutError,
    ResponseParseError,
    ValidationError,
)
from pdfassist.models import ProviderConfig
from pdfassist.providers.anthropic_client import AnthropicCompatibleClient


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self.text = payload if isinstance(payload, str) else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.responses = responses or []
        self.error = error
        self.calls = []
        self.headers = {}
        self.trust_env = True
        self.closed = False

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "json": json, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)

    def close(self):
        self.closed = True


def _client(session, system_prompt=None):
    config = ProviderConfig(
        api_key="sk-ant",
        base_url="https://api.anthropic.com/v1/",
        model="claude-test",
        max_tokens=1024,
        temperature=0.7,
        timeout_sec=30,
    )
    return AnthropicCompatibleClient(config, system_prompt=system_prompt, session=session)


def _message(*blocks):
    return FakeResponse(200, {"content": list(blocks), "stop_reason": "end_turn"})


def test_chat_posts_messages_request_with_api_key_headers():
    session = FakeSession(responses=[_message({"type": "text", "text": " Bonjour "})])

    result = _client(session).chat("Hello")

    assert result.output == "Bonjour"
    assert result.reasoning is None
    call = session.calls[0]
    assert call["headers"] == {
        "x-api-key": "sk-ant",
        "anthropic-version": "2023-06-01",
        "Content-Type": "application/json",
    }
    assert call["method"] == "POST"
    assert call["url"] == "https://api.anthropic.com/v1/messages"
    assert call["timeout"] == 30
    assert call["json"] == {
        "model": "claude-test",
        "messages": [{"role": "user", "content": "Hello"}],
        "max_tokens": 1024,
        "temperature": 0.7,
    }


def test_system_prompt_is_sent_when_configured():
    session = FakeSession(responses=[_message({"type": "text", "text": "ok"})])

    _client(session, system_prompt="Be brief.").chat("Hello")

    assert session.calls[0]["json"]["system"] == "Be brief."


def test_first_text_block_is_used():
    session = FakeSession(
        responses=[
            _message(
                {"type": "tool_use", "id": "t1", "name": "lookup", "input": {}},
                {"type": "text", "text": "<reasoning>check</reasoning>Answer"},
                {"type": "text", "text": "ignored"},
            )
        ]
    )

    result = _client(session).chat("Question")

    assert result.reasoning == "check"
    assert result.output == "Answer"


def test_empty_prompt_issues_no_request():
    session = FakeSession(responses=[_message({"type": "text", "text": "unused"})])

    with pytest.raises(ValidationError):
        _client(session).chat("")
    with pytest.raises(ValidationError):
        _client(session).summarize("text", "  ")

    assert session.calls == []


def test_response_without_text_blocks_is_a_failure():
    session = FakeSession(responses=[_message()])

    with pytest.raises(NoCompletionError, match="No text content in response"):
        _client(session).chat("Hello")


def test_blank_text_block_is_a_failure():
    session = FakeSession(responses=[_message({"type": "text", "text": "  "})])

    with pytest.raises(EmptyCompletionError):
        _client(session).chat("Hello")


def test_reasoning_only_text_block_is_a_failure():
    session = FakeSession(
        responses=[_message({"type": "text", "text": "<thinking>only reasoning</thinking>"})]
    )

    with pytest.raises(EmptyCompletionError, match="empty response"):
        _client(session).chat("Hello")


def test_injected_session_is_left_untouched():
    session = FakeSession(responses=[_message({"type": "text", "text": "ok"})])

    client = _client(session)
    client.chat("Hello")
    client.close()

    assert session.headers == {}
    assert session.trust_env is True
    assert session.closed is False


def test_owned_session_is_closed_on_exit(monkeypatch):
    closed = []
    monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(self))
    config = ProviderConfig("sk-ant", "https://api.anthropic.com/v1", "claude-test", 64, 0.7, 30)

    with AnthropicCompatibleClient(config) as client:
        assert client.session.trust_env is False

    assert closed == [client.session]


def test_unparseable_success_body_raises_parse_error():
    session = FakeSession(responses=[FakeResponse(200, "not json")])

    with pytest.raises(ResponseParseError, match="Failed to parse API response"):
        _client(session).chat("Hello")


def test_known_error_type_maps_to_actionable_message():
    session = FakeSession(
        responses=[
            FakeResponse(
                401,
                {
                    "type": "error",
                    "error": {"type": "authentication_error", "message": "invalid x-api-key"},
                },
            )
        ]
    )

    with pytest.raises(ProviderHTTPError) as exc_info:
        _client(session).chat("Hello")

    assert str(exc_info.value) == (
        "API Error: Invalid API key. Please check your API key in settings."
    )
    assert exc_info.value.status_code == 401


def test_unknown_error_type_uses_provider_message():
    session = FakeSession(
        responses=[
            FakeResponse(
                400,
                {
                    "type": "error",
                    "error": {
                        "type": "invalid_request_error",
                        "message": "max_tokens: must be positive",
                    },
                },
            )
        ]
    )

    with pytest.raises(ProviderHTTPError, match="^API Error: max_tokens: must be positive$"):
        _client(session).chat("Hello")


@pytest.mark.parametrize(
    ("status_code", "prefix"),
    [
        (401, "Unauthorized: Invalid API key"),
        (403, "Forbidden: Check your API key permissions"),
        (404, "Not found: Check your base URL and model"),
        (429, "Rate limited: Too many requests"),
        (502, "Server error: AI service is temporarily unavailable"),
        (418, "Unknown API error"),
    ],
)
def test_unparseable_error_body_falls_back_to_status_table(status_code, prefix):
    session = FakeSession(responses=[FakeResponse(status_code, "<html>nope</html>")])

    with pytest.raises(ProviderHTTPError) as exc_info:
        _client(session).chat("Hello")

    assert str(exc_info.value) == f"{prefix} (<html>nope</html>)"


def test_transport_failures_are_classified():
    with pytest.raises(ProviderTimeoutError, match="Request timed out"):
        _client(FakeSession(error=requests.exceptions.ReadTimeout("slow"))).chat("Hi")

    with pytest.raises(ProviderConnectionError, match="Failed to connect"):
        _client(FakeSession(error=requests.exceptions.ConnectionError("refused"))).chat("Hi")

    with pytest.raises(ProviderNetworkError, match="Network error: too many redirects"):
        _client(
            FakeSession(error=requests.exceptions.TooManyRedirects("too many redirects"))
        ).chat("Hi")
