"""Pick and build a provider client from its base URL."""

from __future__ import annotations

from ..client import LLMClient
from ..exceptions import UnsupportedProviderError
from ..models import ProviderConfig, ProviderKind
from . import anthropic_client, openai_client
from .anthropic_client import AnthropicCompatibleClient
from .base import DEFAULT_TIMEOUT_SEC
from .openai_client import OpenAICompatibleClient

# Checked in order; first substring hit wins.
OPENAI_COMPATIBLE_HOSTS = (
    "api.openai.com",
    "api.together.xyz",
    "api.deepseek.com",
    "localhost:1234",
    "localhost:11434",
)
ANTHROPIC_COMPATIBLE_HOSTS = ("api.anthropic.com",)

_PROVIDER_DEFAULTS = {
    ProviderKind.OPENAI_COMPATIBLE: openai_client,
    ProviderKind.ANTHROPIC_COMPATIBLE: anthropic_client,
}


def select_provider(base_url: str | None) -> ProviderKind:
    url = base_url or openai_client.DEFAULT_BASE_URL
    if any(host in url for host in OPENAI_COMPATIBLE_HOSTS):
        return ProviderKind.OPENAI_COMPATIBLE
    if any(host in url for host in ANTHROPIC_COMPATIBLE_HOSTS):
        return ProviderKind.ANTHROPIC_COMPATIBLE
    raise UnsupportedProviderError(url)


def build_provider_config(
    kind: ProviderKind,
    api_key: str,
    base_url: str | None = None,
    model: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    timeout_sec: float | None = None,
) -> ProviderConfig:
    defaults = _PROVIDER_DEFAULTS[kind]
    return ProviderConfig(
        api_key=api_key,
        base_url=base_url or defaults.DEFAULT_BASE_URL,
        model=model or defaults.DEFAULT_MODEL,
        max_tokens=defaults.DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
        temperature=defaults.DEFAULT_TEMPERATURE if temperature is None else temperature,
        timeout_sec=DEFAULT_TIMEOUT_SEC if timeout_sec is None else timeout_sec,
    )


def create_llm_client(
    api_key: str,
    base_url: str | None = None,
    model: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    timeout_sec: float | None = None,
    trust_env: bool = False,
) -> LLMClient:
    kind = select_provider(base_url)
    config = build_provider_config(
        kind,
        api_key=api_key,
        base_url=base_url,
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        timeout_sec=timeout_sec,
    )

    if kind is ProviderKind.ANTHROPIC_COMPATIBLE:
        provider = AnthropicCompatibleClient(config, trust_env=trust_env)
    else:
        provider = OpenAICompatibleClient(config, trust_env=trust_env)
    return LLMClient(kind, provider)
