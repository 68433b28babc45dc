"""Anthropic-compatible messages client."""

from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

import requests

from ..exceptions import (
    NoCompletionError,
    ProviderConnectionError,
    ProviderNetworkError,
    ProviderTimeoutError,
    ResponseParseError,
)
from ..models import ProviderConfig
from .base import CONNECT_MESSAGE, TIMEOUT_MESSAGE, ProviderClient

DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
DEFAULT_MODEL = "claude-3-sonnet-20240229"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicCompatibleClient(ProviderClient):
    """Thin wrapper over the ``/messages`` endpoint."""

    ERROR_TYPE_MESSAGES = {
        "authentication_error": "Invalid API key. Please check your API key in settings.",
        "permission_error": "Permission denied. Please check your API key permissions.",
        "not_found_error": "Model not found. Please check your model selection in settings.",
        "rate_limit_error": "Rate limit exceeded. Please try again in a moment.",
        "overloaded_error": "AI service is overloaded. Please try again in a moment.",
    }

    def __init__(
        self,
        config: ProviderConfig,
        system_prompt: str | None = None,
        trust_env: bool = False,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(config)
        self.system_prompt = system_prompt
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.trust_env = trust_env
        self.session = session

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.config.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

    def _build_url(self, path: str) -> str:
        return urljoin(f"{self.config.base_url}/", path.lstrip("/"))

    def _complete(self, prompt: str) -> str:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        if self.system_prompt:
            payload["system"] = self.system_prompt

        response = self._post("/messages", payload)
        if not response.ok:
            raise self._status_error(response.status_code, response.text)

        body = self._parse_json(response.text)
        if not isinstance(body, dict) or not isinstance(body.get("content"), list):
            raise ResponseParseError("Failed to parse API response: missing field `content`")

        for block in body["content"]:
            if isinstance(block, dict) and block.get("type") == "text":
                return str(block.get("text") or "")

        raise NoCompletionError("No text content in response")

    def _post(self, path: str, payload: dict[str, Any]) -> requests.Response:
        try:
            return self.session.request(
                method="POST",
                url=self._build_url(path),
                headers=self._headers(),
                json=payload,
                timeout=self.config.timeout_sec,
            )
        except requests.exceptions.Timeout as exc:
            raise ProviderTimeoutError(TIMEOUT_MESSAGE) from exc
        except requests.exceptions.ConnectionError as exc:
            raise ProviderConnectionError(CONNECT_MESSAGE) from exc
        except requests.exceptions.RequestException as exc:
            raise ProviderNetworkError(f"Network error: {exc}") from exc
