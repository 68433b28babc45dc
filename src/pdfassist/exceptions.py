"""Custom exceptions for pdfassist."""


class PdfAssistError(Exception):
    """Base exception for the project."""


class ConfigError(PdfAssistError):
    """Raised when required configuration is missing or invalid."""


class ValidationError(PdfAssistError):
    """Raised when a required input is empty, before any I/O happens."""


class PdfError(PdfAssistError):
    """Raised when a PDF cannot be validated or read."""


class PdfNotFoundError(PdfError):
    """Raised when the PDF path does not exist."""


class NotAPdfError(PdfError):
    """Raised when the file does not carry a .pdf extension."""


class FileTooLargeError(PdfError):
    """Raised when the file exceeds the configured size ceiling."""


class PdfLoadError(PdfError):
    """Raised when the PDF container cannot be parsed."""


class NoPagesError(PdfError):
    """Raised when the PDF page table is empty."""


class NoReadableTextError(PdfError):
    """Raised when no page yields text, usually a scanned document."""


class ProviderError(PdfAssistError):
    """Raised when an LLM provider call fails."""


class ProviderTimeoutError(ProviderError):
    """Raised when the provider does not answer within the timeout."""


class ProviderConnectionError(ProviderError):
    """Raised when the provider endpoint cannot be reached."""


class ProviderNetworkError(ProviderError):
    """Raised for transport failures that are neither timeouts nor connect errors."""


class ProviderHTTPError(ProviderError):
    """Raised when the provider answers with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(ProviderError):
    """Raised when a successful response body cannot be decoded."""


class NoCompletionError(ProviderError):
    """Raised when a successful response carries no completion candidate."""


class EmptyCompletionError(ProviderError):
    """Raised when the completion text is blank after trimming."""


class UnsupportedProviderError(ProviderError):
    """Raised when no provider matches the configured base URL."""

    def __init__(self, base_url: str) -> None:
        super().__init__(f"Unsupported base URL: {base_url}. Please use a known provider.")
        self.base_url = base_url
