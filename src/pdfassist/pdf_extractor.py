"""Local PDF validation and text extraction built on pypdf."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pypdf import PdfReader

from .exceptions import (
    FileTooLargeError,
    NoPagesError,
    NoReadableTextError,
    NotAPdfError,
    PdfLoadError,
    PdfNotFoundError,
)
from .models import PdfInfo
from .text_cleaner import clean_text

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

TEXT_CHECK_PAGE_LIMIT = 3
_BYTES_PER_MB = 1024 * 1024


def validate_pdf_file(file_path: str | Path) -> Path:
    path = Path(file_path)
    if not path.exists():
        raise PdfNotFoundError("File does not exist")
    if path.suffix.lower() != ".pdf":
        raise NotAPdfError("File is not a PDF")
    return path


def validate_file_size(file_path: str | Path, max_size_mb: int) -> None:
    """Reject files whose whole-megabyte size is above ``max_size_mb``."""

    size_mb = Path(file_path).stat().st_size // _BYTES_PER_MB
    if size_mb > max_size_mb:
        raise FileTooLargeError(
            f"File size {size_mb}MB exceeds limit of {max_size_mb}MB"
        )


def format_file_size(size_bytes: int) -> str:
    if size_bytes < 1024:
        return f"{size_bytes} bytes"
    if size_bytes < _BYTES_PER_MB:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / _BYTES_PER_MB:.1f} MB"


class PdfTextExtractor:
    """Extract cleaned text and basic facts from local PDF files."""

    def __init__(self, reader_factory: Callable[[Path], Any] = PdfReader) -> None:
        self.reader_factory = reader_factory

    def extract_text(self, file_path: str | Path) -> str:
        path = validate_pdf_file(file_path)
        pages = self._load_pages(path)
        if not pages:
            raise NoPagesError("PDF contains no pages")

        fragments: list[str] = []
        for page_number, page in enumerate(pages, 1):
            try:
                page_text = page.extract_text() or ""
            except Exception as exc:
                logger.warning(
                    "Failed to extract text from page %d of %s: %s",
                    page_number,
                    path.name,
                    exc,
                )
                continue
            if page_text.strip():
                fragments.append(page_text)

        cleaned = clean_text("\n".join(fragments))
        if not cleaned.strip():
            raise NoReadableTextError(
                "No readable text found in PDF. This might be an image-based PDF "
                "or contain only graphics."
            )

        logger.debug(
            "Extracted %d characters from %d/%d pages of %s",
            len(cleaned),
            len(fragments),
            len(pages),
            path.name,
        )
        return cleaned

    def get_pdf_info(self, file_path: str | Path) -> PdfInfo:
        path = validate_pdf_file(file_path)
        pages = self._load_pages(path)
        return PdfInfo(
            page_count=len(pages),
            title=path.stem or "Unknown",
            has_text=self._has_extractable_text(pages),
        )

    def _load_pages(self, path: Path) -> list[Any]:
        try:
            reader = self.reader_factory(path)
            return list(reader.pages)
        except Exception as exc:
            raise PdfLoadError(f"Failed to load PDF: {exc}") from exc

    def _has_extractable_text(self, pages: list[Any]) -> bool:
        # Only the leading pages are checked; text that starts later is missed.
        for page in pages[:TEXT_CHECK_PAGE_LIMIT]:
            try:
                text = page.extract_text() or ""
            except Exception as exc:
                logger.debug("Text check failed on a page: %s", exc)
                continue
            if text.strip():
                return True
        return False
