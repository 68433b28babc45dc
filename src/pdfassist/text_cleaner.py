"""Normalization of raw text pulled out of PDF pages."""

from __future__ import annotations

TYPOGRAPHIC_PUNCTUATION = frozenset(
    {
        "—",  # em dash
        "–",  # en dash
        "“",
        "”",
        "‘",
        "’",
    }
)

# str.isspace() counts the ASCII information separators as whitespace; they are noise here.
INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def _is_whitespace(char: str) -> bool:
    return char.isspace() and char not in INFORMATION_SEPARATORS


def _is_kept(char: str) -> bool:
    if "!" <= char <= "~":
        return True
    if _is_whitespace(char):
        return True
    if ord(char) > 127 and char.isalpha():
        return True
    return char in TYPOGRAPHIC_PUNCTUATION


def clean_text(text: str) -> str:
    """Collapse extracted text into one whitespace-normalized line.

    Paragraph structure and page boundaries are not preserved. Only ``\\n``
    separates lines; other control characters are dropped without leaving a gap.
    """

    lines = (line.strip() for line in text.split("\n"))
    joined = " ".join(line for line in lines if line)
    filtered = "".join(char for char in joined if _is_kept(char))
    return " ".join(filtered.split())
