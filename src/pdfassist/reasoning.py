"""Separate an embedded reasoning block from model output."""

from __future__ import annotations

import re

# Open and close tag names are matched independently; local models disagree on naming.
REASONING_BLOCK_PATTERN = re.compile(
    r"<(?:think|thinking|reasoning)>(.*?)</(?:think|thinking|reasoning)>",
    re.DOTALL,
)


def split_reasoning(raw: str) -> tuple[str | None, str]:
    match = REASONING_BLOCK_PATTERN.search(raw)
    if match is None:
        return None, raw.strip()

    reasoning = match.group(1).strip()
    output = (raw[: match.start()] + raw[match.end() :]).strip()
    return reasoning, output
