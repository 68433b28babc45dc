"""Contract shared by every provider client."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import (
    EmptyCompletionError,
    ProviderHTTPError,
    ResponseParseError,
    ValidationError,
)
from ..models import ChatResult, ProviderConfig
from ..reasoning import split_reasoning

logger = logging.getLogger(__name__)

CONNECTION_TEST_PROMPT = "Say 'Connection test successful' if you can hear me."
TRUNCATION_MARKER = "...[truncated for length]"
PROMPT_OVERHEAD_TOKENS = 200
CHARS_PER_TOKEN = 4
DEFAULT_TIMEOUT_SEC = 120

TIMEOUT_MESSAGE = "Request timed out. Try increasing the timeout in settings."
CONNECT_MESSAGE = (
    "Failed to connect to AI service. Check your base URL and internet connection."
)


def status_fallback_message(status_code: int) -> str:
    if status_code == 401:
        return "Unauthorized: Invalid API key"
    if status_code == 403:
        return "Forbidden: Check your API key permissions"
    if status_code == 404:
        return "Not found: Check your base URL and model"
    if status_code == 429:
        return "Rate limited: Too many requests"
    if 500 <= status_code <= 599:
        return "Server error: AI service is temporarily unavailable"
    return "Unknown API error"


def estimate_max_chars(max_tokens: int) -> int:
    """Character budget for document text under a completion token limit."""

    if max_tokens > PROMPT_OVERHEAD_TOKENS:
        available_tokens = max_tokens - PROMPT_OVERHEAD_TOKENS
    else:
        available_tokens = max_tokens // 2
    return available_tokens * CHARS_PER_TOKEN


def truncate_text(text: str, max_chars: int) -> str:
    if len(text) > max_chars:
        return text[:max_chars] + TRUNCATION_MARKER
    return text


class ProviderClient(ABC):
    """One LLM provider behind the chat/summarize/test_connection contract.

    Subclasses implement ``_complete`` for their wire format and keep an
    ``ERROR_TYPE_MESSAGES`` table for the error codes they understand.
    """

    ERROR_TYPE_MESSAGES: dict[str, str] = {}

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config

    @property
    def model(self) -> str:
        return self.config.model

    def __enter__(self) -> ProviderClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP transport if this client created it."""

    def chat(self, prompt: str) -> ChatResult:
        if not prompt.strip():
            raise ValidationError("No prompt provided for chat")

        logger.debug(
            "Sending %d-character prompt to %s (model=%s)",
            len(prompt),
            self.config.base_url,
            self.config.model,
        )
        reasoning, output = split_reasoning(self._complete(prompt))
        # A reply holding only a reasoning block has nothing to show the caller.
        if not output:
            raise EmptyCompletionError("AI service returned empty response")
        return ChatResult(reasoning=reasoning, output=output)

    def summarize(self, text: str, prompt: str) -> str:
        if not text.strip():
            raise ValidationError("No text provided for summarization")
        if not prompt.strip():
            raise ValidationError("No prompt provided")

        truncated_text = truncate_text(text, estimate_max_chars(self.config.max_tokens))
        full_prompt = f"{prompt}\n\nDocument content:\n{truncated_text}"
        return self.chat(full_prompt).output

    def test_connection(self) -> str:
        return self.chat(CONNECTION_TEST_PROMPT).output

    @abstractmethod
    def _complete(self, prompt: str) -> str:
        """Send one single-turn request and return the first completion text."""

    def _status_error(self, status_code: int, body: str) -> ProviderHTTPError:
        envelope_message = self._describe_error_envelope(body)
        if envelope_message is not None:
            return ProviderHTTPError(f"API Error: {envelope_message}", status_code)
        return ProviderHTTPError(
            f"{status_fallback_message(status_code)} ({body})", status_code
        )

    def _describe_error_envelope(self, body: str) -> str | None:
        try:
            payload = json.loads(body)
        except (TypeError, ValueError):
            return None

        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict) or not isinstance(error.get("message"), str):
            return None

        for key in ("type", "code"):
            error_type = error.get(key)
            if isinstance(error_type, str) and error_type in self.ERROR_TYPE_MESSAGES:
                return self.ERROR_TYPE_MESSAGES[error_type]
        return error["message"]

    def _parse_json(self, body: str) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ResponseParseError(f"Failed to parse API response: {exc}") from exc
