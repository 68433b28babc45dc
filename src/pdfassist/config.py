"""Environment-based configuration for pdfassist."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_SUMMARY_PROMPT = (
    "Please provide a concise summary of this PDF document, "
    "highlighting the main points and key insights."
)
DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SEC = 120
DEFAULT_MAX_FILE_SIZE_MB = 10

MAX_TOKENS_RANGE = (1, 10_000)
TEMPERATURE_RANGE = (0.0, 2.0)
TIMEOUT_RANGE_SEC = (10, 600)


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str
    model: str | None
    max_tokens: int
    temperature: float
    timeout_sec: int
    summary_prompt: str
    max_file_size_mb: int
    network_trust_env: bool


_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _read_env(*keys: str, default: str | None = None) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value is not None and value != "":
            return value
    return default


def _read_bool(*keys: str, default: bool) -> bool:
    raw = _read_env(*keys)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_VALUES


def _read_int(*keys: str, default: int) -> int:
    raw = _read_env(*keys)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {keys[0]}: {raw}") from exc


def _read_float(*keys: str, default: float) -> float:
    raw = _read_env(*keys)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid float for {keys[0]}: {raw}") from exc


def _check_range(name: str, value: float, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise ConfigError(f"{name} must be between {low} and {high}, got {value}")


def load_settings(dotenv_path: str | Path | None = None) -> Settings:
    """Load settings from .env and OS env vars."""

    load_dotenv(dotenv_path=dotenv_path, override=False)

    max_tokens = _read_int("PDFASSIST_MAX_TOKENS", default=DEFAULT_MAX_TOKENS)
    temperature = _read_float("PDFASSIST_TEMPERATURE", default=DEFAULT_TEMPERATURE)
    timeout_sec = _read_int("PDFASSIST_TIMEOUT_SEC", default=DEFAULT_TIMEOUT_SEC)
    max_file_size_mb = _read_int(
        "PDFASSIST_MAX_FILE_SIZE_MB", default=DEFAULT_MAX_FILE_SIZE_MB
    )

    _check_range("PDFASSIST_MAX_TOKENS", max_tokens, MAX_TOKENS_RANGE)
    _check_range("PDFASSIST_TEMPERATURE", temperature, TEMPERATURE_RANGE)
    _check_range("PDFASSIST_TIMEOUT_SEC", timeout_sec, TIMEOUT_RANGE_SEC)
    if max_file_size_mb <= 0:
        raise ConfigError(
            f"PDFASSIST_MAX_FILE_SIZE_MB must be positive, got {max_file_size_mb}"
        )

    return Settings(
        api_key=_read_env("PDFASSIST_API_KEY", "OPENAI_API_KEY", "API_KEY", default="")
        or "",
        base_url=(
            _read_env("PDFASSIST_BASE_URL", "BASE_URL", default=DEFAULT_BASE_URL)
            or DEFAULT_BASE_URL
        ).rstrip("/"),
        model=_read_env("PDFASSIST_MODEL", "MODEL"),
        max_tokens=max_tokens,
        temperature=temperature,
        timeout_sec=timeout_sec,
        summary_prompt=_read_env("PDFASSIST_SUMMARY_PROMPT", default=DEFAULT_SUMMARY_PROMPT)
        or DEFAULT_SUMMARY_PROMPT,
        max_file_size_mb=max_file_size_mb,
        network_trust_env=_read_bool("NETWORK_TRUST_ENV", default=False),
    )
