"""Typed models used across pdfassist."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import ValidationError


class ProviderKind(Enum):
    """Closed set of provider wire formats."""

    OPENAI_COMPATIBLE = "openai_compatible"
    ANTHROPIC_COMPATIBLE = "anthropic_compatible"


@dataclass(frozen=True)
class ProviderConfig:
    """Connection and sampling settings owned by one provider client."""

    api_key: str
    base_url: str
    model: str
    max_tokens: int
    temperature: float
    timeout_sec: float

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValidationError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.timeout_sec <= 0:
            raise ValidationError(f"timeout must be positive, got {self.timeout_sec}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"ProviderConfig(base_url={self.base_url!r}, model={self.model!r}, "
            f"max_tokens={self.max_tokens}, temperature={self.temperature}, "
            f"timeout_sec={self.timeout_sec})"
        )


@dataclass(frozen=True)
class ChatResult:
    """One completion split into optional reasoning and the user-facing output."""

    reasoning: str | None
    output: str


@dataclass(frozen=True)
class PdfInfo:
    """Cheap structural facts about a PDF."""

    page_count: int
    title: str
    has_text: bool


@dataclass(frozen=True)
class SummarizationResponse:
    summary: str
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {"summary": self.summary, "success": self.success, "error": self.error}


@dataclass(frozen=True)
class ChatResponse:
    output: str | None
    reasoning: str | None
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "output": self.output,
            "reasoning": self.reasoning,
            "success": self.success,
            "error": self.error,
        }


@dataclass(frozen=True)
class ConnectionTestResponse:
    success: bool
    message: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {"success": self.success, "message": self.message, "error": self.error}


@dataclass(frozen=True)
class PdfAnalysisResponse:
    page_count: int
    title: str
    has_text: bool
    file_size: str
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "pageCount": self.page_count,
            "title": self.title,
            "hasText": self.has_text,
            "fileSize": self.file_size,
            "success": self.success,
            "error": self.error,
        }


@dataclass(frozen=True)
class TextExtractionResponse:
    content: str | None
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {"content": self.content, "success": self.success, "error": self.error}
