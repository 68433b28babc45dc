"""Single client type that hides which provider was selected."""

from __future__ import annotations

from .exceptions import ValidationError
from .models import ChatResult, ProviderKind
from .providers.anthropic_client import AnthropicCompatibleClient
from .providers.base import ProviderClient
from .providers.openai_client import OpenAICompatibleClient

PROVIDER_CLASSES: dict[ProviderKind, type[ProviderClient]] = {
    ProviderKind.OPENAI_COMPATIBLE: OpenAICompatibleClient,
    ProviderKind.ANTHROPIC_COMPATIBLE: AnthropicCompatibleClient,
}


class LLMClient:
    """Forward chat, summarize and connection tests to the active provider."""

    def __init__(self, kind: ProviderKind, provider: ProviderClient) -> None:
        expected = PROVIDER_CLASSES[kind]
        if not isinstance(provider, expected):
            raise ValidationError(
                f"{kind.value} requires {expected.__name__}, got {type(provider).__name__}"
            )
        self.kind = kind
        self.provider = provider

    def __enter__(self) -> LLMClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.provider.close()

    def chat(self, prompt: str) -> ChatResult:
        return self.provider.chat(prompt)

    def summarize(self, text: str, prompt: str) -> str:
        return self.provider.summarize(text, prompt)

    def test_connection(self) -> str:
        return self.provider.test_connection()
