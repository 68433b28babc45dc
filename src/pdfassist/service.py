"""Caller-facing operations that always return a structured envelope."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .config import DEFAULT_MAX_FILE_SIZE_MB
from .exceptions import PdfAssistError, ValidationError
from .models import (
    ChatResponse,
    ConnectionTestResponse,
    PdfAnalysisResponse,
    SummarizationResponse,
    TextExtractionResponse,
)
from .pdf_extractor import (
    PdfTextExtractor,
    format_file_size,
    validate_file_size,
    validate_pdf_file,
)
from .providers.factory import create_llm_client

if TYPE_CHECKING:
    from collections.abc import Callable

    from .client import LLMClient

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDER = "your-api-key-here"
CONNECTION_TEST_MAX_TOKENS = 20
CONNECTION_TEST_TEMPERATURE = 0.1


def _has_usable_api_key(api_key: str) -> bool:
    return bool(api_key.strip()) and api_key != API_KEY_PLACEHOLDER


class PdfAssistService:
    """Coordinates PDF extraction and provider calls for one request at a time."""

    def __init__(
        self,
        extractor: PdfTextExtractor | None = None,
        client_factory: Callable[..., LLMClient] = create_llm_client,
        max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB,
        trust_env: bool = False,
    ) -> None:
        self.extractor = extractor or PdfTextExtractor()
        self.client_factory = client_factory
        self.max_file_size_mb = max_file_size_mb
        self.trust_env = trust_env

    def summarize_pdf(
        self,
        file_path: str | Path,
        prompt: str,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout_sec: float | None = None,
    ) -> SummarizationResponse:
        try:
            if not _has_usable_api_key(api_key):
                raise ValidationError("Please configure a valid API key in settings")
            if not prompt.strip():
                raise ValidationError("Prompt cannot be empty")

            validate_pdf_file(file_path)
            validate_file_size(file_path, self.max_file_size_mb)
            text = self.extractor.extract_text(file_path)

            with self._build_client(
                api_key, base_url, model, max_tokens, temperature, timeout_sec
            ) as client:
                summary = client.summarize(text, prompt)
        except (PdfAssistError, OSError) as exc:
            logger.info("Summarization of %s failed: %s", file_path, exc)
            return SummarizationResponse(summary="", success=False, error=str(exc))

        return SummarizationResponse(summary=summary, success=True)

    def chat(
        self,
        prompt: str,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout_sec: float | None = None,
        include_reasoning: bool = False,
    ) -> ChatResponse:
        try:
            if not _has_usable_api_key(api_key):
                raise ValidationError("Please configure a valid API key in settings")
            if not prompt.strip():
                raise ValidationError("Prompt cannot be empty")

            with self._build_client(
                api_key, base_url, model, max_tokens, temperature, timeout_sec
            ) as client:
                result = client.chat(prompt)
        except PdfAssistError as exc:
            logger.info("Chat request failed: %s", exc)
            return ChatResponse(output=None, reasoning=None, success=False, error=str(exc))

        return ChatResponse(
            output=result.output,
            reasoning=result.reasoning if include_reasoning else None,
            success=True,
        )

    def test_connection(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        timeout_sec: float | None = None,
    ) -> ConnectionTestResponse:
        try:
            if not _has_usable_api_key(api_key):
                raise ValidationError("Please provide a valid API key")

            with self._build_client(
                api_key,
                base_url,
                model,
                CONNECTION_TEST_MAX_TOKENS,
                CONNECTION_TEST_TEMPERATURE,
                timeout_sec,
            ) as client:
                message = client.test_connection()
        except PdfAssistError as exc:
            logger.info("Connection test failed: %s", exc)
            return ConnectionTestResponse(success=False, error=str(exc))

        return ConnectionTestResponse(success=True, message=message)

    def analyze_pdf(self, file_path: str | Path) -> PdfAnalysisResponse:
        try:
            info = self.extractor.get_pdf_info(file_path)
            file_size = format_file_size(Path(file_path).stat().st_size)
        except (PdfAssistError, OSError) as exc:
            return PdfAnalysisResponse(
                page_count=0,
                title="Unknown",
                has_text=False,
                file_size="Unknown",
                success=False,
                error=str(exc),
            )

        return PdfAnalysisResponse(
            page_count=info.page_count,
            title=info.title,
            has_text=info.has_text,
            file_size=file_size,
            success=True,
        )

    def extract_pdf_text(self, file_path: str | Path) -> TextExtractionResponse:
        try:
            content = self.extractor.extract_text(file_path)
        except (PdfAssistError, OSError) as exc:
            return TextExtractionResponse(content=None, success=False, error=str(exc))
        return TextExtractionResponse(content=content, success=True)

    def _build_client(
        self,
        api_key: str,
        base_url: str | None,
        model: str | None,
        max_tokens: int | None,
        temperature: float | None,
        timeout_sec: float | None,
    ) -> LLMClient:
        return self.client_factory(
            api_key=api_key,
            base_url=base_url,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            timeout_sec=timeout_sec,
            trust_env=self.trust_env,
        )
