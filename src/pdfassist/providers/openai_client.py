"""OpenAI-compatible chat completions client."""

from __future__ import annotations

from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    OpenAI,
    OpenAIError,
)

from ..exceptions import (
    NoCompletionError,
    ProviderConnectionError,
    ProviderNetworkError,
    ProviderTimeoutError,
    ResponseParseError,
)
from ..models import ProviderConfig
from .base import CONNECT_MESSAGE, TIMEOUT_MESSAGE, ProviderClient

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7


class OpenAICompatibleClient(ProviderClient):
    """Client for OpenAI, Together, DeepSeek, LM Studio and Ollama endpoints."""

    ERROR_TYPE_MESSAGES = {
        "invalid_api_key": "Invalid API key. Please check your API key in settings.",
        "insufficient_quota": "API quota exceeded. Please check your account billing.",
        "model_not_found": "Model not found. Please check your model selection in settings.",
        "rate_limit_exceeded": "Rate limit exceeded. Please try again in a moment.",
    }

    def __init__(
        self,
        config: ProviderConfig,
        trust_env: bool = False,
        client: OpenAI | None = None,
    ) -> None:
        super().__init__(config)
        self._owns_client = client is None
        self.http_client: httpx.Client | None = None
        if client is None:
            self.http_client = httpx.Client(
                timeout=config.timeout_sec,
                trust_env=trust_env,
            )
            client = OpenAI(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout_sec,
                max_retries=0,
                http_client=self.http_client,
            )
        self.client = client

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _complete(self, prompt: str) -> str:
        raw_response = self._request_completion(prompt)
        payload = self._parse_json(raw_response.text)

        if not isinstance(payload, dict) or not isinstance(payload.get("choices"), list):
            raise ResponseParseError("Failed to parse API response: missing field `choices`")

        choices = payload["choices"]
        if not choices:
            raise NoCompletionError("No response from AI service")

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise ResponseParseError("Failed to parse API response: missing field `message`")
        return self._extract_content(message.get("content"))

    def _request_completion(self, prompt: str) -> Any:
        try:
            return self.client.chat.completions.with_raw_response.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except APITimeoutError as exc:
            raise ProviderTimeoutError(TIMEOUT_MESSAGE) from exc
        except APIConnectionError as exc:
            raise ProviderConnectionError(CONNECT_MESSAGE) from exc
        except APIStatusError as exc:
            raise self._status_error(exc.status_code, exc.response.text) from exc
        except APIResponseValidationError as exc:
            raise ResponseParseError(f"Failed to parse API response: {exc}") from exc
        except OpenAIError as exc:
            raise ProviderNetworkError(f"Network error: {exc}") from exc

    def _extract_content(self, content: Any) -> str:
        if isinstance(content, str):
            return content

        if isinstance(content, list):
            chunks: list[str] = []
            for item in content:
                if isinstance(item, dict) and "text" in item:
                    chunks.append(str(item["text"]))
            return "\n".join(chunks)

        return ""
